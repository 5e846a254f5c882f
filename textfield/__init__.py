"""Cursor, selection, undo and keyboard handling for text-entry widgets."""

__version__ = "1.0.0"
__all__ = ["buffer", "undo", "editor"]