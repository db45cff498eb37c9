"""
Output management for rendered comics.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from chatcomic.config import Config

logger = logging.getLogger(__name__)


class OutputManager:
    """Writes the finished comic to disk."""

    def __init__(self, config: Config):
        """
        Initialize output manager.

        Args:
            config: Application configuration
        """
        self.config = config
        self.output_file = config.output_file

    def save_comic(self, image: Image.Image, output_file: Optional[Path] = None) -> Path:
        """
        Save a comic image as PNG.

        Args:
            image: Composed comic
            output_file: Optional path overriding the configured one

        Returns:
            Path the comic was written to
        """
        path = Path(output_file or self.output_file)
        path.parent.mkdir(parents=True, exist_ok=True)

        image.save(path, format="PNG")

        logger.info(f"Saved {image.width}x{image.height} comic to {path}")
        return path
