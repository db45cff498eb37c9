"""
Shared fixtures for chat comic tests.
"""

import pytest
from PIL import Image, ImageFont

from chatcomic.assets import AssetProvider, Character
from chatcomic.config import Config


@pytest.fixture
def font():
    """Font that needs no files on disk."""
    return ImageFont.load_default()


@pytest.fixture
def background():
    """Solid blue 400x300 background."""
    return Image.new("RGB", (400, 300), (0, 0, 255))


@pytest.fixture
def assets(font, background):
    """Asset provider with two characters, one background and one font."""
    alice = Character("alice", {"neutral": Image.new("RGBA", (100, 200), (255, 0, 0, 255))})
    bob = Character(
        "bob",
        {
            "neutral": Image.new("RGBA", (100, 200), (0, 255, 0, 255)),
            "happy": Image.new("RGBA", (100, 200), (0, 128, 0, 255)),
        },
    )
    return AssetProvider(
        characters={"alice": alice, "bob": bob},
        backgrounds={"basket": background},
        fonts={"comic": font},
    )


@pytest.fixture
def config(tmp_path):
    """Configuration pointing at a temporary directory."""
    return Config(
        assets_dir=tmp_path,
        background="basket",
        font_name="comic",
        output_file=tmp_path / "combined.png",
        seed=1,
    )
