"""taskboard: a single-screen terminal to-do list."""

from taskboard.config import VERSION as __version__

__all__ = ["__version__"]
