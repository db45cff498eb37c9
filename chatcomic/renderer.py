"""
Panel rendering.

Draws a zoomed background, the speakers' character art and their speech
bubbles into one square panel image.
"""

import logging
from typing import List, Optional

from PIL import Image, ImageDraw

from chatcomic.assets import AssetNotFoundError, AssetProvider
from chatcomic.bubbles import Pointing, SpeechBubble, TAIL_LENGTH, create_text, draw_bubble
from chatcomic.panels import MessageRole, PanelGroup


logger = logging.getLogger(__name__)

# Background crop starts this far from the top
BACKGROUND_CROP_TOP = 80

# Background scale per zoom level, level 1 first
BACKGROUND_SCALES = (0.6, 1.0, 1.0, 1.0)

# Two-shot character box
TWO_SHOT_HEIGHT = 180
TWO_SHOT_ASPECT = 0.9166

# Where characters are pasted
SINGLE_OFFSET_X = -40
SINGLE_OFFSET_BOTTOM = 200
TWO_SHOT_Y = 150
TWO_SHOT_RIGHT_INSET = 150

# Bubble placement
BUBBLE_MARGIN = 10
REPLY_GAP = 40
CONTINUATION_GAP = 10


def flip(image: Image.Image) -> Image.Image:
    """Mirror an image horizontally."""
    return image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)


def background_zoom(level: int, background: Image.Image) -> Image.Image:
    """
    Crop into a background and stretch it back to its original size.

    Args:
        level: Zoom level, 1-based; unknown levels do not scale
        background: Background image

    Returns:
        Zoomed background with the same size as the input
    """
    width, height = background.size
    scale = 1.0
    if 0 < level <= len(BACKGROUND_SCALES):
        scale = BACKGROUND_SCALES[level - 1]

    top = min(BACKGROUND_CROP_TOP, height - 1)
    bottom = int((height + BACKGROUND_CROP_TOP) * scale)
    bottom = max(top + 1, min(bottom, height))

    cropped = background.crop((0, top, width, bottom))
    return cropped.resize((width, height), Image.Resampling.LANCZOS)


def to_initial_size(sprite: Image.Image, mirror: bool) -> Image.Image:
    """Resize a sprite into the two-shot box, optionally mirrored."""
    height = TWO_SHOT_HEIGHT
    width = int(TWO_SHOT_ASPECT * height + 1)
    resized = sprite.resize((width, height), Image.Resampling.LANCZOS)
    if mirror:
        resized = flip(resized)
    return resized


def to_zoomed(level: int, sprite: Image.Image, mirror: bool) -> Image.Image:
    """
    Frame a character sprite for a zoom level.

    Level 1 keeps the top half of the sprite at full size. Any other level
    fits the whole sprite into the two-shot box.
    """
    if level == 1:
        if mirror:
            sprite = flip(sprite)
        return sprite.crop((0, 0, sprite.width, int(sprite.height * 0.5)))
    return to_initial_size(sprite, mirror)


class PanelRenderer:
    """Renders panel groups using a shared asset provider."""

    def __init__(
        self,
        assets: AssetProvider,
        font_name: str,
        expression: str = "neutral",
    ):
        """
        Initialize panel renderer.

        Args:
            assets: Loaded assets
            font_name: Name of the font bubbles are drawn with
            expression: Character expression drawn for every speaker

        Raises:
            AssetNotFoundError: If the font is not loaded
        """
        self.assets = assets
        self.expression = expression
        self.font = assets.get_font(font_name)
        if self.font is None:
            raise AssetNotFoundError(f"Font not found: {font_name}")

    def render(self, group: PanelGroup, background: Image.Image) -> Image.Image:
        """
        Render one panel.

        Args:
            group: Messages of the panel with their roles
            background: Background image; its width sets the panel size

        Returns:
            Square RGBA panel image

        Raises:
            AssetNotFoundError: If a speaker has no sprite for the expression
        """
        width, height = background.size
        panel = Image.new("RGBA", (width, width), (0, 0, 0, 0))
        panel.paste(background_zoom(1, background.convert("RGBA")), (0, 0))
        draw = ImageDraw.Draw(panel)

        if group.is_single:
            role = group.roles[0]
            person = self._character_art(role)
            panel.paste(person, (SINGLE_OFFSET_X, height - SINGLE_OFFSET_BOTTOM), person)

            self._draw_bubbles(
                draw, create_text(role.message.text, True), BUBBLE_MARGIN, BUBBLE_MARGIN, Pointing.LEFT
            )
        else:
            first, second = group.roles
            left = self._character_art(first)
            right = self._character_art(second)
            panel.paste(left, (0, TWO_SHOT_Y), left)
            panel.paste(right, (width - TWO_SHOT_RIGHT_INSET, TWO_SHOT_Y), right)

            bottom = self._draw_bubbles(
                draw, create_text(first.message.text, True), BUBBLE_MARGIN, BUBBLE_MARGIN, Pointing.LEFT
            )
            self._draw_bubbles(
                draw, create_text(second.message.text, False), None, bottom + REPLY_GAP, Pointing.RIGHT,
                panel_width=width,
            )

        logger.debug(f"Rendered panel with {len(group)} message(s)")
        return panel

    def _character_art(self, role: MessageRole) -> Image.Image:
        speaker = role.message.speaker
        if speaker.character is None:
            raise AssetNotFoundError(f"No character assigned to {speaker.nick!r}")

        sprite = speaker.character.get_image(self.expression)
        if sprite is None:
            available = ", ".join(speaker.character.expressions) or "none"
            raise AssetNotFoundError(
                f"Character {speaker.character.name!r} has no {self.expression!r} expression"
                f" (available: {available})"
            )
        return to_zoomed(role.zoom, sprite.convert("RGBA"), not role.facing_right)

    def _draw_bubbles(
        self,
        draw: ImageDraw.ImageDraw,
        bubbles: List[SpeechBubble],
        x: Optional[float],
        y: float,
        point: Pointing,
        panel_width: int = 0,
    ) -> float:
        """
        Draw a message's bubbles stacked top to bottom.

        A ``None`` x right-aligns every bubble to ``panel_width``.

        Returns:
            Bottom edge of the last bubble
        """
        bottom = y
        for bubble in bubbles:
            left = x
            if left is None:
                left = panel_width - bubble.size(self.font)[0]
            geometry = draw_bubble(draw, bubble, self.font, left, y, point)
            bottom = geometry.bottom
            y = bottom + TAIL_LENGTH + CONTINUATION_GAP
        return bottom
