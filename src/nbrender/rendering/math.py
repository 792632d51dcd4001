"""Rendering of TeX math expressions to MathML."""

import html
import logging

from latex2mathml.converter import convert

from nbrender.rendering.utils import escape_html

logger = logging.getLogger(__name__)


def render_math(tex: str, display_mode: bool = True) -> str:
    """Render a TeX math expression as MathML.

    Expressions that cannot be converted are rendered as their escaped TeX
    source in a ``span.math-error``, so one bad formula does not break the
    whole notebook.

    Args:
        tex: TeX source without delimiters
        display_mode: Render as a block (True) or inline (False)

    Returns:
        str: MathML markup
    """
    try:
        return convert(tex, display="block" if display_mode else "inline")
    except Exception as e:
        logger.warning("Failed to render math %r: %s", tex, e)
        return f'<span class="math-error" title="{html.escape(str(e), quote=True)}">{escape_html(tex)}</span>'
