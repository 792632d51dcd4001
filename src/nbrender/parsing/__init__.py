"""Notebook reading for nbrender."""

from nbrender.parsing.notebook import NotebookReader

__all__ = ["NotebookReader"]
