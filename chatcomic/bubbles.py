"""
Speech bubble layout for comic panels.

This module turns message text into one or more speech bubbles, computes
where each bubble and its tail sit inside a panel, and draws them with
Pillow. Layout is kept separate from drawing so geometry can be computed
from the text, the pointing direction and the font metrics alone.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from PIL import ImageDraw

from chatcomic.text_wrap import wrap


logger = logging.getLogger(__name__)

# Padding to the left and right of the text, in pixels
X_PADDING = 15

# Total padding above and below the text, in pixels
Y_PADDING = 10

# Maximum number of lines a single bubble holds
MAX_LINES = 5

# Character budgets per line
MONOLOGUE_WIDTH = 26
DIALOGUE_WIDTH = 13

# Distance the tail extends below the bubble body
TAIL_LENGTH = 30

CORNER_RADIUS = 5
OUTLINE_WIDTH = 2


class Pointing(Enum):
    """Direction a bubble's tail points towards."""

    LEFT = (0.7, 0.6, 0.5)
    RIGHT = (0.4, 0.3, 0.5)

    @property
    def fractions(self) -> Tuple[float, float, float]:
        """Tail x-offsets as fractions of the bubble width."""
        return self.value


@dataclass(frozen=True)
class BubbleGeometry:
    """Where a laid-out bubble sits inside a panel."""

    x: float
    y: float
    width: float
    height: float
    line_height: int
    tail: Tuple[Tuple[int, int], ...]
    text_origins: Tuple[Tuple[int, int], ...]

    @property
    def bottom(self) -> float:
        """Bottom edge of the bubble body."""
        return self.y + self.height

    @property
    def right(self) -> float:
        """Right edge of the bubble body."""
        return self.x + self.width

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Body rectangle as (left, top, right, bottom) in whole pixels."""
        return (int(self.x), int(self.y), int(self.right), int(self.bottom))


def text_extent(font, text: str) -> Tuple[int, int]:
    """
    Measure text as drawn from the origin.

    Args:
        font: Pillow font (anything with ``getbbox``)
        text: Text to measure

    Returns:
        Tuple of (width, height) in pixels
    """
    if not text:
        return 0, 0
    _, _, right, bottom = font.getbbox(text)
    return right, bottom


@dataclass(frozen=True)
class SpeechBubble:
    """A block of wrapped, uppercased text that fits in one bubble."""

    lines: Tuple[str, ...]
    line_length: int
    max_line: str = field(init=False)

    def __post_init__(self):
        longest = ""
        for line in self.lines:
            if len(line) > len(longest):
                longest = line
        object.__setattr__(self, "max_line", longest)

    @classmethod
    def from_text(cls, text: str, line_length: int) -> "SpeechBubble":
        """Wrap ``text`` at ``line_length`` characters into a bubble."""
        return cls(tuple(wrap(text.upper(), line_length)), line_length)

    @property
    def num_lines(self) -> int:
        return len(self.lines)

    @property
    def words(self) -> List[str]:
        return " ".join(self.lines).split()

    def size(self, font) -> Tuple[float, float, int]:
        """
        Compute the bubble body size for a font.

        Args:
            font: Font used to draw the text

        Returns:
            Tuple of (width, height, line height)
        """
        text_width, line_height = text_extent(font, self.max_line)
        width = text_width + 2 * X_PADDING
        height = (self.num_lines * line_height + 0.5) + Y_PADDING
        return width, height, line_height

    def layout(self, font, x: float, y: float, point: Pointing) -> BubbleGeometry:
        """
        Lay the bubble out with its body's top-left corner at (x, y).

        Args:
            font: Font used to draw the text
            x: Left edge of the bubble body
            y: Top edge of the bubble body
            point: Direction the tail points towards

        Returns:
            Geometry of the body, tail and text lines
        """
        width, height, line_height = self.size(font)
        a, b, c = point.fractions
        edge = int(y + height - 1)
        tail = (
            (int(x + width * a), edge),
            (int(x + width * b), edge),
            (int(x + width * c), int(y + height + TAIL_LENGTH)),
        )
        origins = tuple(
            (int(x + X_PADDING), int(y + Y_PADDING / 2 + i * line_height))
            for i in range(self.num_lines)
        )
        return BubbleGeometry(x, y, width, height, line_height, tail, origins)


def create_text(text: str, monologue: bool) -> List[SpeechBubble]:
    """
    Create speech bubbles for a message, splitting it if it is too long.

    The first bubble keeps the requested width budget. Whatever does not
    fit in its first ``MAX_LINES`` lines flows into continuation bubbles
    wrapped at the monologue width.

    Args:
        text: The message text
        monologue: Whether the speaker has the panel to themselves

    Returns:
        Ordered list of speech bubbles, each with at most MAX_LINES lines
    """
    bubbles = []
    bubble = SpeechBubble.from_text(text, MONOLOGUE_WIDTH if monologue else DIALOGUE_WIDTH)

    while bubble.num_lines > MAX_LINES:
        head = " ".join(bubble.lines[:MAX_LINES])
        overflow = " ".join(bubble.lines[MAX_LINES:])
        bubbles.append(SpeechBubble.from_text(head, bubble.line_length))
        bubble = SpeechBubble.from_text(overflow, MONOLOGUE_WIDTH)

    bubbles.append(bubble)

    if len(bubbles) > 1:
        logger.debug(f"Split message into {len(bubbles)} bubbles")
    return bubbles


def draw_bubble(
    draw: ImageDraw.ImageDraw,
    bubble: SpeechBubble,
    font,
    x: float,
    y: float,
    point: Pointing,
) -> BubbleGeometry:
    """
    Draw a speech bubble into an image.

    Args:
        draw: Drawing context of the target image
        bubble: Bubble to draw
        font: Font for the text
        x: Left edge of the bubble body
        y: Top edge of the bubble body
        point: Direction the tail points towards

    Returns:
        Geometry the bubble was drawn with
    """
    geometry = bubble.layout(font, x, y, point)

    draw.polygon(geometry.tail, fill="white", outline="black")
    draw.rounded_rectangle(
        geometry.box,
        radius=CORNER_RADIUS,
        fill="white",
        outline="black",
        width=OUTLINE_WIDTH,
    )

    for line, origin in zip(bubble.lines, geometry.text_origins):
        draw.text(origin, line, fill="black", font=font)

    return geometry
