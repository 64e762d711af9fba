"""Render a grid of terminal cells into an RGB pixmap in software."""

__version__ = "0.1.0"
__all__ = ["backend", "buffer", "colors", "pixmap"]