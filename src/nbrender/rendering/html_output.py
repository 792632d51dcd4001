"""Renderer for text/html outputs with a workaround for SageMath TeX output."""

import re
from typing import Any, Callable

from nbrender.rendering.elements import ElementBuilder

# SageMath wraps TeX output into a MathJax script inside a bare <html>.
SAGEMATH_TEX_PATTERN = re.compile(
    r'^\s*<html>\s*<script\s*type="math/tex(?:;[^"]*)">([\s\S]*)</script></html>\s*$'
)


def build_html_renderer(
    element_builder: ElementBuilder,
    math_renderer: Callable[[str], str],
) -> Callable[[str], Any]:
    """Return a text/html data renderer.

    Args:
        element_builder: Builder used for creating the elements
        math_renderer: Renders TeX to HTML

    Returns:
        Callable: Renderer returning div.latex-output with the rendered math
        for SageMath's embedded TeX, or div.html-output with the data as-is
    """
    el = element_builder

    def render_html(data: str) -> Any:
        match = SAGEMATH_TEX_PATTERN.match(data)
        if match and match.group(1):
            return el("div", ["latex-output"], math_renderer(match.group(1)))
        return el("div", ["html-output"], data)

    return render_html
