"""Rendering of notebooks into element trees."""

from nbrender.rendering.elements import ElementBuilder, MinimalElement
from nbrender.rendering.math_extractor import MathExpression, extract_math, restore_math
from nbrender.rendering.renderer import NotebookRenderer, coalesce_streams
from nbrender.rendering.resolver import resolve_data_type
from nbrender.rendering.utils import escape_html, join_text

__all__ = [
    "ElementBuilder",
    "MinimalElement",
    "MathExpression",
    "NotebookRenderer",
    "coalesce_streams",
    "escape_html",
    "extract_math",
    "join_text",
    "resolve_data_type",
    "restore_math",
]
