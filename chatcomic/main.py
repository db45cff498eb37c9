"""
Main application for the chat comic generator.

This module provides the CLI interface and orchestration for turning a
conversation script into a comic strip.
"""

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from PIL import Image

from chatcomic.assets import AssetNotFoundError, AssetProvider
from chatcomic.config import Config, load_config, validate_config
from chatcomic.grid import GridComposer
from chatcomic.output_manager import OutputManager
from chatcomic.panels import group_panels
from chatcomic.renderer import PanelRenderer
from chatcomic.script import parse_script


# Configure logging
def setup_logging(verbose: bool = False):
    """
    Configure logging for the application.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("chatcomic.log"),
        ],
    )

    # Reduce noise from external libraries
    logging.getLogger("PIL").setLevel(logging.WARNING)


class ComicGenerator:
    """Turns conversation scripts into comic strips."""

    def __init__(self, config: Config, assets: Optional[AssetProvider] = None):
        """
        Initialize comic generator.

        Args:
            config: Application configuration
            assets: Preloaded assets, loaded from config.assets_dir when omitted
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self._assets = assets
        self.rng = random.Random(config.seed)

    @property
    def assets(self) -> AssetProvider:
        if self._assets is None:
            self._assets = AssetProvider.from_directory(
                self.config.assets_dir, font_size=self.config.font_size
            )
        return self._assets

    def render_panels(self, lines: Iterable[str]) -> List[Image.Image]:
        """
        Render every panel of a conversation.

        Args:
            lines: Script lines in ``nickname,message`` form

        Returns:
            Panel images in conversation order

        Raises:
            ScriptFormatError: If a line is malformed
            AssetNotFoundError: If the background, font or a sprite is missing
        """
        conversation = parse_script(lines)
        if not conversation.messages:
            self.logger.info("Script has no messages")
            return []

        conversation.assign_characters(self.assets, self.rng)
        groups = group_panels(conversation.messages)
        self.logger.info(
            f"Grouped {len(conversation.messages)} messages into {len(groups)} panels"
        )

        background = self.assets.get_background(self.config.background)
        if background is None:
            raise AssetNotFoundError(f"Background not found: {self.config.background}")

        renderer = PanelRenderer(self.assets, self.config.font_name, self.config.expression)
        return [renderer.render(group, background) for group in groups]

    def generate(self, lines: Iterable[str]) -> Image.Image:
        """
        Generate a comic image from script lines.

        Args:
            lines: Script lines in ``nickname,message`` form

        Returns:
            The composed comic
        """
        panels = self.render_panels(lines)
        return GridComposer(self.config.columns).compose(panels)

    def generate_from_file(self, script_path: Path, output_file: Optional[Path] = None) -> Path:
        """
        Generate a comic from a script file and save it.

        Nothing is written if any panel fails to render.

        Args:
            script_path: Path to the script
            output_file: Optional output path overriding the configured one

        Returns:
            Path of the saved comic
        """
        self.logger.info(f"Reading script {script_path}")
        with open(script_path, encoding="utf-8") as f:
            lines = list(f)

        comic = self.generate(lines)
        return OutputManager(self.config).save_comic(comic, output_file)


def create_parser() -> argparse.ArgumentParser:
    """
    Create command-line argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Turn a conversation script into a comic strip",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Script format, one message per line:
  alice,hello there
  bob,hi!

Settings such as ASSETS_DIR, COLUMNS or OUTPUT_FILE are read from the
environment or a .env file.
        """,
    )

    parser.add_argument(
        "script",
        nargs="?",
        type=Path,
        help="Conversation script, one 'nickname,message' per line",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.script is None:
        return 0

    try:
        # Load configuration
        config = load_config()
    except Exception as e:
        setup_logging()
        logging.getLogger(__name__).error(f"Error loading configuration: {e}")
        return 1

    # Setup logging
    setup_logging(config.debug)
    logger = logging.getLogger(__name__)

    try:
        validate_config(config)

        generator = ComicGenerator(config)
        output_path = generator.generate_from_file(args.script)

        print(f"Comic saved to: {output_path}")
        return 0

    except KeyboardInterrupt:
        logger.info("Generation cancelled by user")
        return 130

    except Exception as e:
        logger.error(f"Error generating comic: {e}", exc_info=config.debug)
        return 1


if __name__ == "__main__":
    sys.exit(main())
