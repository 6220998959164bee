"""Turn-based console simulator of four robots crossing a square track with obstacles."""

__version__ = "0.1.0"
__all__ = ["__version__"]