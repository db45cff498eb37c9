"""Turn conversation scripts into comic strips."""

__version__ = "0.1.0"
