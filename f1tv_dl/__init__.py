"""F1 TV video downloader."""

__version__ = "1.0.0"
