"""Redwood: a small markdown wiki."""
from redwood._version import __version__

__all__ = ["__version__"]
