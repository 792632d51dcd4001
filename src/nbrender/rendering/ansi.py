"""Conversion of ANSI escape sequences in terminal output to HTML."""

from typing import Optional

from rich.ansi import AnsiDecoder
from rich.color import Color, ColorType
from rich.style import Style
from rich.text import Text

from nbrender.rendering.utils import escape_html

COLORS = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


def _color_attrs(color: Optional[Color], layer: str) -> tuple[Optional[str], Optional[str]]:
    """Return the class name or the inline CSS for a foreground/background color."""
    if color is None or color.type == ColorType.DEFAULT:
        return None, None

    # The 16 basic colors get classes so the page theme can restyle them.
    if color.number is not None and color.number < 16:
        name = COLORS[color.number % 8]
        if color.number >= 8:
            name += "-intense"
        return f"ansi-{name}-{layer}", None

    red, green, blue = color.get_truecolor()
    prop = "color" if layer == "fg" else "background-color"
    return None, f"{prop}: rgb({red}, {green}, {blue})"


def style_attributes(style: Style) -> dict[str, str]:
    """Map a rich Style to the attributes of a span.

    Args:
        style: Style decoded from SGR sequences

    Returns:
        dict: ``class`` with ``ansi-*`` names and/or ``style`` with inline
        colors (256-color palette above 15 and RGB); empty if nothing applies
    """
    classes = []
    css = []
    for color, layer in ((style.color, "fg"), (style.bgcolor, "bg")):
        class_name, declaration = _color_attrs(color, layer)
        if class_name:
            classes.append(class_name)
        if declaration:
            css.append(declaration)

    if style.bold:
        classes.append("ansi-bold")
    if style.underline:
        classes.append("ansi-underline")

    attrs = {}
    if classes:
        attrs["class"] = " ".join(classes)
    if css:
        attrs["style"] = "; ".join(css)
    return attrs


def _render_line(line: Text) -> str:
    plain = line.plain
    parts = []
    pos = 0

    for span in line.spans:
        if span.start > pos:
            parts.append(escape_html(plain[pos:span.start]))

        chunk = escape_html(plain[span.start:span.end])
        style = span.style if isinstance(span.style, Style) else Style.parse(span.style)
        attrs = style_attributes(style)
        if attrs:
            attrs_html = "".join(f' {name}="{value}"' for name, value in attrs.items())
            parts.append(f"<span{attrs_html}>{chunk}</span>")
        else:
            parts.append(chunk)
        pos = max(pos, span.end)

    parts.append(escape_html(plain[pos:]))
    return "".join(parts)


def ansi_to_html(text: str) -> str:
    """Convert text with ANSI escape sequences to HTML.

    SGR sequences are decoded with rich. Basic colors, bold and underline
    become ``span`` elements with ``ansi-*`` classes, 256-color and RGB colors
    become inline styles; all other escape sequences are dropped. The text is
    HTML-escaped. A carriage return overwrites the line, as in a terminal.

    Args:
        text: Raw terminal output

    Returns:
        str: HTML markup
    """
    decoder = AnsiDecoder()
    lines = text.replace("\r\n", "\n").split("\n")

    # decode_line keeps the style across lines, like a terminal does.
    return "\n".join(_render_line(decoder.decode_line(line)) for line in lines)
