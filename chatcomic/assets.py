"""
Asset loading for comic rendering.

Characters, backgrounds and fonts are read once from a directory tree:

    <root>/characters/<name>/<expression>.<ext>
    <root>/backgrounds/<name>.<ext>
    <root>/fonts/<name>.ttf

Files that cannot be read are reported and skipped, so a missing asset
only fails the run when a panel actually needs it.
"""

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image, ImageFont


logger = logging.getLogger(__name__)


class AssetNotFoundError(Exception):
    """A required asset is not loaded."""
    pass


@dataclass(frozen=True)
class Character:
    """A character with one sprite per expression."""

    name: str
    sprites: Dict[str, Image.Image] = field(default_factory=dict, compare=False, hash=False)

    @property
    def expressions(self) -> List[str]:
        """Names of the available expressions."""
        return sorted(self.sprites)

    def get_image(self, expression: str) -> Optional[Image.Image]:
        """
        Get the sprite for an expression.

        Args:
            expression: Expression name, e.g. "neutral"

        Returns:
            The sprite, or None if the character has no such expression
        """
        return self.sprites.get(expression)


def _read_image(path: Path) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        return img.convert("RGBA")


class AssetProvider:
    """Read-only lookup of characters, backgrounds and fonts by name."""

    def __init__(
        self,
        characters: Optional[Dict[str, Character]] = None,
        backgrounds: Optional[Dict[str, Image.Image]] = None,
        fonts: Optional[Dict[str, ImageFont.FreeTypeFont]] = None,
    ):
        self.characters = dict(characters or {})
        self.backgrounds = dict(backgrounds or {})
        self.fonts = dict(fonts or {})

    @classmethod
    def from_directory(cls, root: Path, font_size: int = 16) -> "AssetProvider":
        """
        Load every asset found under a directory.

        Args:
            root: Asset root containing characters/, backgrounds/ and fonts/
            font_size: Point size fonts are loaded at

        Returns:
            Populated asset provider
        """
        root = Path(root)
        provider = cls(
            characters=_load_characters(root / "characters"),
            backgrounds=_load_backgrounds(root / "backgrounds"),
            fonts=_load_fonts(root / "fonts", font_size),
        )
        logger.info(
            f"Loaded {len(provider.characters)} characters, "
            f"{len(provider.backgrounds)} backgrounds, "
            f"{len(provider.fonts)} fonts from {root}"
        )
        return provider

    def has_character(self, name: str) -> bool:
        return name in self.characters

    def get_character(self, name: str) -> Optional[Character]:
        return self.characters.get(name)

    def get_random_character(self, rng: Optional[random.Random] = None) -> Character:
        """
        Pick a loaded character uniformly at random.

        Args:
            rng: Random generator to draw from, defaults to the module RNG

        Returns:
            A loaded character

        Raises:
            AssetNotFoundError: If no characters are loaded
        """
        if not self.characters:
            raise AssetNotFoundError("No characters loaded")
        rng = rng or random
        return self.characters[rng.choice(sorted(self.characters))]

    def get_background(self, name: str) -> Optional[Image.Image]:
        return self.backgrounds.get(name)

    def get_font(self, name: str) -> Optional[ImageFont.FreeTypeFont]:
        return self.fonts.get(name)


def _files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        logger.warning(f"Asset directory not found: {directory}")
        return []
    return sorted(directory.iterdir())


def _load_characters(root: Path) -> Dict[str, Character]:
    characters = {}
    for char_dir in _files(root):
        if not char_dir.is_dir() or char_dir.name in characters:
            continue

        sprites = {}
        for path in _files(char_dir):
            if not path.is_file() or path.stem in sprites:
                continue
            try:
                sprites[path.stem] = _read_image(path)
            except OSError as e:
                logger.warning(f"Error loading sprite {path}: {e}")

        characters[char_dir.name] = Character(char_dir.name, sprites)
        logger.debug(f"Loaded character {char_dir.name}: {sorted(sprites)}")
    return characters


def _load_backgrounds(root: Path) -> Dict[str, Image.Image]:
    backgrounds = {}
    for path in _files(root):
        if not path.is_file() or path.stem in backgrounds:
            continue
        try:
            backgrounds[path.stem] = _read_image(path)
        except OSError as e:
            logger.warning(f"Error loading background {path}: {e}")
    return backgrounds


def _load_fonts(root: Path, size: int) -> Dict[str, ImageFont.FreeTypeFont]:
    fonts = {}
    for path in _files(root):
        if not path.is_file() or path.suffix.lower() != ".ttf" or path.stem in fonts:
            continue
        try:
            fonts[path.stem] = ImageFont.truetype(str(path), size)
        except OSError as e:
            logger.warning(f"Error loading font {path}: {e}")
    return fonts
