"""Small text helpers shared by the renderers."""

from typing import Any, TypeVar

T = TypeVar("T")

_HTML_ENTITIES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
})


def escape_html(text: str, *_rest: Any) -> str:
    """Escape characters with special meaning in HTML.

    Extra positional arguments are ignored, so the function can stand in for
    a code highlighter (``(code, language) -> str``).
    """
    return text.translate(_HTML_ENTITIES)


def identity(value: T, *_rest: Any) -> T:
    """Return the first argument unchanged."""
    return value


def join_text(text: Any) -> str:
    """Join a multiline string (str or list of line fragments) into one str.

    Fragments are concatenated directly; they already carry their newlines.
    """
    if isinstance(text, list):
        return "".join(join_text(fragment) for fragment in text)
    return text


def plain_text(tokens: Any) -> str:
    """Concatenate the text of inline markdown-it tokens, without markup.

    Link and image targets are dropped, their texts are kept; line breaks
    become spaces.
    """
    parts = []
    for token in tokens or []:
        if token.type in ("text", "code_inline"):
            parts.append(token.content)
        elif token.type in ("softbreak", "hardbreak"):
            parts.append(" ")
        elif token.children:
            parts.append(plain_text(token.children))
    return "".join(parts)
