"""Filmroom: team video-review backend."""

__version__ = "0.1.0"
