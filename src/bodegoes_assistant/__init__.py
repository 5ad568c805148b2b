"""Bodegoes restaurant chat assistant."""

__version__ = "0.1.0"
