"""Plain-text presentation of session state."""

from .text import TextRenderer

__all__ = ["TextRenderer"]
