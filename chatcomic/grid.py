"""
Composition of rendered panels into a single comic image.
"""

import logging
from typing import List, Tuple

from PIL import Image, ImageDraw


logger = logging.getLogger(__name__)

# Space between panels and around the edge of the comic
X_PADDING = 10
Y_PADDING = 10

BORDER_WIDTH = 3

DEFAULT_COLUMNS = 4


class GridComposer:
    """Tiles panels left to right, top to bottom, in rows of fixed length."""

    def __init__(self, columns: int = DEFAULT_COLUMNS):
        """
        Initialize grid composer.

        Args:
            columns: Maximum number of panels per row
        """
        if columns < 1:
            raise ValueError(f"columns must be at least 1, got {columns}")
        self.columns = columns

    def canvas_size(self, panels: List[Image.Image]) -> Tuple[int, int]:
        """
        Calculate the size of the comic holding all panels.

        Args:
            panels: Panel images in reading order

        Returns:
            Tuple of (width, height)
        """
        if not panels:
            return X_PADDING, Y_PADDING

        max_width = 0
        total_height = 0
        row_width = 0
        row_height = 0

        for i, panel in enumerate(panels):
            row_width += panel.width + X_PADDING
            row_height = max(row_height, panel.height)

            if (i + 1) % self.columns == 0:
                max_width = max(max_width, row_width)
                total_height += row_height + Y_PADDING
                row_width = 0
                row_height = 0

        # partial last row
        if len(panels) % self.columns:
            max_width = max(max_width, row_width)
            total_height += row_height + Y_PADDING

        return max_width + X_PADDING, total_height

    def compose(self, panels: List[Image.Image]) -> Image.Image:
        """
        Draw all panels onto a white canvas with a border around each.

        Args:
            panels: Panel images in reading order

        Returns:
            The comic as an RGB image
        """
        size = self.canvas_size(panels)
        comic = Image.new("RGB", size, "white")
        draw = ImageDraw.Draw(comic)

        x = X_PADDING
        y = Y_PADDING
        row_height = 0

        for i, panel in enumerate(panels):
            if panel.mode == "RGBA":
                comic.paste(panel, (x, y), panel)
            else:
                comic.paste(panel, (x, y))
            draw.rectangle(
                [x, y, x + panel.width, y + panel.height],
                outline="black",
                width=BORDER_WIDTH,
            )

            x += panel.width + X_PADDING
            row_height = max(row_height, panel.height)

            if (i + 1) % self.columns == 0:
                x = X_PADDING
                y += row_height + Y_PADDING
                row_height = 0

        logger.info(f"Composed {len(panels)} panels into {size[0]}x{size[1]} comic")
        return comic
