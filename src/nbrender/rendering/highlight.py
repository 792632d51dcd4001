"""Syntax highlighting of source code with Pygments."""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from nbrender.rendering.utils import escape_html

_FORMATTER = HtmlFormatter(nowrap=True)


def highlight_code(code: str, language: str) -> str:
    """Highlight source code as HTML.

    Args:
        code: Source code, unescaped
        language: Language name or alias known to Pygments

    Returns:
        str: HTML with token spans; escaped plain text if the language is
        not recognized
    """
    try:
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return escape_html(code)

    html = highlight(code, lexer, _FORMATTER)
    if html.endswith("\n") and not code.endswith("\n"):
        html = html[:-1]
    return html
