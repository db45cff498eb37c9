"""
Configuration management for the chat comic generator.

Handles environment variables and application settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Config:
    """Application configuration."""

    # Asset locations
    assets_dir: Path = Path("mschat")
    background: str = "basket"
    font_name: str = "ldfcomicsansb"
    font_size: int = 16
    expression: str = "neutral"

    # Layout
    columns: int = 4

    # Output settings
    output_file: Path = Path("combined.png")

    # Random seed for character assignment
    seed: Optional[int] = None

    # Debug settings
    debug: bool = False


class ConfigError(Exception):
    """Configuration error."""
    pass


def _int_env(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def load_config(env_file: Optional[str] = None) -> Config:
    """
    Load configuration from environment variables.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config object with parsed settings

    Raises:
        ConfigError: If a numeric setting is not a number or out of range
    """
    # Load environment variables from .env file
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    assets_dir = Path(os.getenv("ASSETS_DIR", "mschat"))
    background = os.getenv("BACKGROUND", "basket")
    font_name = os.getenv("FONT_NAME", "ldfcomicsansb")
    expression = os.getenv("EXPRESSION", "neutral")

    font_size = _int_env("FONT_SIZE", "16")
    if font_size < 1:
        raise ConfigError("FONT_SIZE must be at least 1")

    columns = _int_env("COLUMNS", "4")
    if columns < 1:
        raise ConfigError("COLUMNS must be at least 1")

    output_file = Path(os.getenv("OUTPUT_FILE", "combined.png"))

    seed_str = os.getenv("SEED")
    seed = _int_env("SEED", seed_str) if seed_str else None

    debug = os.getenv("DEBUG", "false").lower() == "true"

    return Config(
        assets_dir=assets_dir,
        background=background,
        font_name=font_name,
        font_size=font_size,
        expression=expression,
        columns=columns,
        output_file=output_file,
        seed=seed,
        debug=debug,
    )


def validate_config(config: Config) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration object to validate

    Raises:
        ConfigError: If configuration is invalid
    """
    if config.columns < 1:
        raise ConfigError("columns must be at least 1")

    if config.font_size < 1:
        raise ConfigError("font_size must be at least 1")

    if not config.assets_dir.is_dir():
        raise ConfigError(
            f"Assets directory not found: {config.assets_dir}. "
            "Set ASSETS_DIR to a directory with characters/, backgrounds/ and fonts/."
        )
