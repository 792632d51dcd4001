"""Construction of a fully configured notebook renderer."""

from collections.abc import Mapping
from typing import Any, Callable, Optional

from nbrender.config import NbRenderConfig, get_config
from nbrender.models import Element
from nbrender.rendering.ansi import ansi_to_html
from nbrender.rendering.elements import ElementBuilder
from nbrender.rendering.highlight import highlight_code
from nbrender.rendering.html_output import build_html_renderer
from nbrender.rendering.markdown import MarkdownOptions, build_markdown_renderer
from nbrender.rendering.math import render_math
from nbrender.rendering.renderer import (
    BUILTIN_DATA_TYPES,
    AnsiRenderer,
    CodeHighlighter,
    DataRenderer,
    MarkdownRenderer,
    NotebookRenderer,
)


def create_renderer(
    create_element: Callable[[str], Any] = Element,
    *,
    config: Optional[NbRenderConfig] = None,
    data_renderers: Optional[Mapping[str, DataRenderer]] = None,
    data_types_priority: Optional[list[str]] = None,
    ansi_renderer: Optional[AnsiRenderer] = None,
    code_highlighter: Optional[CodeHighlighter] = None,
    markdown_renderer: Optional[MarkdownRenderer] = None,
) -> NotebookRenderer:
    """Build a full-fledged notebook renderer.

    It renders Markdown cells with math (markdown-it-py and latex2mathml),
    highlights code (Pygments), converts ANSI escape sequences in streams and
    tracebacks, and renders SageMath-style math outputs. Any of them may be
    replaced via the arguments.

    Example:
        >>> render = create_renderer()
        >>> html = render(notebook).outer_html

    Args:
        create_element: Factory creating an empty element for a tag name
        config: Renderer configuration (default: global configuration)
        data_renderers: Additional renderers indexed by a media type
        data_types_priority: Media types in the priority order
        ansi_renderer: Converts ANSI escape sequences to HTML
        code_highlighter: Highlights source code, ``(code, lang) -> html``
        markdown_renderer: Converts Markdown to HTML

    Returns:
        NotebookRenderer: Configured renderer
    """
    config = config or get_config()
    element_builder = ElementBuilder(create_element, config.class_prefix)

    math_renderer = render_math if config.render_math else None

    if markdown_renderer is None:
        options = MarkdownOptions(
            header_ids=config.header_ids,
            header_anchors=config.header_anchors,
            header_prefix=config.header_prefix,
            header_ids_strip_accents=config.header_ids_strip_accents,
        )
        markdown_renderer = build_markdown_renderer(
            options,
            math_renderer=math_renderer,
            code_highlighter=code_highlighter or highlight_code,
        )

    if data_types_priority is None:
        data_types_priority = config.data_types_priority

    data_renderers = dict(data_renderers or {})
    if "text/html" not in data_renderers and math_renderer is not None:
        if data_types_priority is None:
            # Keep text/html at its built-in position, behind the images.
            data_types_priority = [
                *data_renderers,
                *(t for t in BUILTIN_DATA_TYPES if t not in data_renderers),
            ]
        data_renderers["text/html"] = build_html_renderer(element_builder, render_math)

    return NotebookRenderer(
        element_builder,
        data_renderers=data_renderers,
        data_types_priority=data_types_priority,
        ansi_renderer=ansi_renderer or ansi_to_html,
        code_highlighter=code_highlighter or highlight_code,
        markdown_renderer=markdown_renderer,
        default_language=config.default_language,
    )
