"""Markdown to HTML conversion with math support.

Math expressions are hidden from the Markdown parser with
``extract_math``, rendered separately and put back with ``restore_math``.
"""

import re
import unicodedata
from typing import Callable, Optional

from markdown_it import MarkdownIt
from pydantic import BaseModel

from nbrender.rendering.highlight import highlight_code
from nbrender.rendering.math_extractor import MARKER_PATTERN, extract_math, restore_math
from nbrender.rendering.utils import escape_html, plain_text

MarkdownRenderer = Callable[[str], str]
MathRenderer = Callable[[str, bool], str]

SLUG_REMOVE_PATTERN = re.compile(
    r"[\u2000-\u206F\u2E00-\u2E7F\\'!\"#$%&()*+,./:;<=>?@\[\]^`{|}~]"
)
HTML_TAG_PATTERN = re.compile(r"<[!/a-z].*?>", re.IGNORECASE)


class MarkdownOptions(BaseModel):
    """Options of the Markdown renderer.

    Attributes:
        header_ids: Generate id attributes for headings
        header_anchors: Generate an anchor link in headings (implies ids)
        header_prefix: Prefix for the generated ids
        header_ids_strip_accents: Strip accents from the generated ids
    """

    header_ids: bool = True
    header_anchors: bool = False
    header_prefix: str = ""
    header_ids_strip_accents: bool = False


class Slugger:
    """Generate unique heading ids within one document."""

    def __init__(self):
        self.seen: dict[str, int] = {}

    def slug(self, value: str) -> str:
        slug = HTML_TAG_PATTERN.sub("", value.lower().strip())
        slug = re.sub(r"\s", "-", SLUG_REMOVE_PATTERN.sub("", slug))

        if slug in self.seen:
            original = slug
            while slug in self.seen:
                self.seen[original] += 1
                slug = f"{original}-{self.seen[original]}"
        self.seen[slug] = 0
        return slug


def strip_accents(text: str) -> str:
    normalized = unicodedata.normalize("NFD", text)
    return "".join(c for c in normalized if not "\u0300" <= c <= "\u036f")


def strip_math(text: str) -> str:
    """Remove math markers from the given text."""
    return MARKER_PATTERN.sub("", text).strip()


def _create_parser(
    options: MarkdownOptions,
    code_highlighter: Callable[[str, str], str],
) -> MarkdownIt:
    def highlight(code: str, lang: str, _attrs: str) -> str:
        return code_highlighter(code, lang) if lang else ""

    md = MarkdownIt("commonmark", {"highlight": highlight}).enable(["table", "strikethrough"])

    def render_heading_open(self, tokens, idx, opts, env):
        token = tokens[idx]
        if not (options.header_ids or options.header_anchors):
            return self.renderToken(tokens, idx, opts, env)

        slugger = env.setdefault("slugger", Slugger())
        heading_text = strip_math(plain_text(tokens[idx + 1].children))
        heading_id = options.header_prefix + slugger.slug(heading_text)
        if options.header_ids_strip_accents:
            heading_id = strip_accents(heading_id)

        token.attrSet("id", heading_id)
        html = self.renderToken(tokens, idx, opts, env)

        if options.header_anchors:
            html += f'<a class="anchor" href="#{escape_html(heading_id)}" aria-hidden="true"></a>'
        return html

    def render_link_open(self, tokens, idx, opts, env):
        _strip_math_attrs(tokens[idx], "href", "title")
        return self.renderToken(tokens, idx, opts, env)

    def render_image(self, tokens, idx, opts, env):
        _strip_math_attrs(tokens[idx], "src", "title")
        return self.image(tokens, idx, opts, env)

    md.add_render_rule("heading_open", render_heading_open)
    md.add_render_rule("link_open", render_link_open)
    md.add_render_rule("image", render_image)
    return md


def _strip_math_attrs(token, *names: str) -> None:
    for name in names:
        value = token.attrGet(name)
        if isinstance(value, str):
            token.attrSet(name, strip_math(value))


def build_markdown_renderer(
    options: Optional[MarkdownOptions] = None,
    math_renderer: Optional[MathRenderer] = None,
    code_highlighter: Callable[[str, str], str] = highlight_code,
) -> MarkdownRenderer:
    """Return a Markdown to HTML converter.

    Args:
        options: Options for the heading ids and anchors
        math_renderer: Renders TeX as HTML, ``(tex, display_mode) -> html``;
            if not provided, math is left in the text as-is
        code_highlighter: Highlights fenced code blocks with a language

    Returns:
        Callable: Function converting Markdown text to HTML
    """
    md = _create_parser(options or MarkdownOptions(), code_highlighter)

    def render(markdown: str) -> str:
        if math_renderer is None:
            return md.render(markdown, {})

        text, math = extract_math(markdown)
        html = md.render(text, {})
        math_html = [math_renderer(expr.value, expr.display_mode) for expr in math]

        return restore_math(html, math_html)

    return render
