"""
Integration tests for the chat comic generator.

These tests run the whole pipeline from a script file on disk and an asset
directory to the saved comic.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image, ImageFont

from chatcomic.assets import AssetProvider
from chatcomic.config import Config
from chatcomic.grid import GridComposer
from chatcomic.main import ComicGenerator, main
from chatcomic.panels import group_panels
from chatcomic.script import parse_script


SCRIPT = """alice,hi bob
bob,oh hey alice, long time no see
alice,I know! It has been ages since we last talked about anything at all really
alice,how have you been?
carol,mind if I join?
"""


class TestFullWorkflow:
    """Test complete workflow integration."""

    @pytest.fixture
    def asset_dir(self, tmp_path):
        """Create an asset directory on disk."""
        root = tmp_path / "mschat"
        for name, color in [("alice", "red"), ("bob", "green")]:
            char_dir = root / "characters" / name
            char_dir.mkdir(parents=True)
            Image.new("RGBA", (120, 240), color).save(char_dir / "neutral.png")
        (root / "backgrounds").mkdir()
        Image.new("RGB", (400, 300), "skyblue").save(root / "backgrounds" / "basket.png")
        (root / "fonts").mkdir()
        return root

    @pytest.fixture
    def provider(self, asset_dir):
        """Load assets from disk, adding a built-in font."""
        provider = AssetProvider.from_directory(asset_dir)
        provider.fonts["comic"] = ImageFont.load_default()
        return provider

    @pytest.fixture
    def test_config(self, tmp_path, asset_dir):
        """Create test configuration."""
        return Config(
            assets_dir=asset_dir,
            font_name="comic",
            output_file=tmp_path / "out" / "combined.png",
            seed=7,
        )

    def test_script_to_comic(self, tmp_path, test_config, provider):
        """Test a script file becomes a saved comic with one cell per panel."""
        script = tmp_path / "chat.txt"
        script.write_text(SCRIPT, encoding="utf-8")

        path = ComicGenerator(test_config, provider).generate_from_file(script)

        # alice/bob, alice, alice/carol
        with Image.open(path) as comic:
            assert comic.format == "PNG"
            assert comic.size == (3 * 410 + 10, 410)

    def test_panel_count_matches_groups(self, test_config, provider):
        """Test the comic holds every group, in order."""
        lines = SCRIPT.splitlines()
        groups = group_panels(parse_script(lines).messages)

        panels = ComicGenerator(test_config, provider).render_panels(lines)

        assert len(panels) == len(groups)
        assert GridComposer(test_config.columns).canvas_size(panels) == (3 * 410 + 10, 410)

    def test_many_panels_wrap_rows(self, test_config, provider):
        """Test long conversations wrap onto several rows."""
        lines = [f"{'alice' if i % 2 else 'bob'},line {i}" for i in range(18)]

        comic = ComicGenerator(test_config, provider).generate(lines)

        # 18 alternating messages make 9 two-speaker panels: rows of 4, 4, 1
        assert comic.size == (4 * 410 + 10, 3 * 410)

    def test_cli_end_to_end(self, tmp_path, test_config, provider):
        """Test the command line writes the comic."""
        script = tmp_path / "chat.txt"
        script.write_text(SCRIPT, encoding="utf-8")
        env = {
            "ASSETS_DIR": str(test_config.assets_dir),
            "FONT_NAME": "comic",
            "OUTPUT_FILE": str(test_config.output_file),
        }

        with patch.dict(os.environ, env, clear=True), \
                patch("chatcomic.main.setup_logging"), \
                patch("chatcomic.main.AssetProvider.from_directory", return_value=provider):
            result = main([str(script)])

        assert result == 0
        assert test_config.output_file.exists()

    def test_cli_bad_script_writes_nothing(self, tmp_path, test_config, provider):
        """Test a malformed script aborts without output."""
        script = tmp_path / "chat.txt"
        script.write_text("alice,hi\nthis line has no comma\n", encoding="utf-8")
        env = {
            "ASSETS_DIR": str(test_config.assets_dir),
            "OUTPUT_FILE": str(test_config.output_file),
        }

        with patch.dict(os.environ, env, clear=True), \
                patch("chatcomic.main.setup_logging"), \
                patch("chatcomic.main.AssetProvider.from_directory", return_value=provider):
            result = main([str(script)])

        assert result == 1
        assert not Path(test_config.output_file).exists()
