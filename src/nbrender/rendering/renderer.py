"""Rendering of Jupyter notebooks into element trees.

Originally based on notebookjs, a JavaScript notebook renderer.
"""

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Optional, Sequence, Union

from nbrender import MissingRendererError
from nbrender.models import (
    CodeCell,
    DisplayData,
    ErrorOutput,
    ExecuteResult,
    MarkdownCell,
    MultilineString,
    Notebook,
    RawCell,
    StreamOutput,
)
from nbrender.rendering.elements import ElementBuilder
from nbrender.rendering.resolver import merge_data_renderers, resolve_data_type
from nbrender.rendering.utils import escape_html, identity, join_text

logger = logging.getLogger(__name__)

# A function rendering one representation of an output into an element.
DataRenderer = Callable[[str], Any]

MarkdownRenderer = Callable[[str], str]
AnsiRenderer = Callable[[str], str]
CodeHighlighter = Callable[[str, str], str]

URL_PATTERN = re.compile(r"^https?")

# Media types with a built-in renderer, in the default priority order.
BUILTIN_DATA_TYPES = (
    "image/png",
    "image/jpeg",
    "image/svg+xml",
    "text/svg+xml",
    "text/html",
    "text/markdown",
    "text/latex",
    "application/javascript",
    "text/plain",
)


def coalesce_streams(outputs: Sequence[Any]) -> list[Any]:
    """Merge consecutive stream outputs with the same name.

    Execution engines often emit a stream in many small chunks; they are
    joined into one output. The given outputs are not modified, a merged
    stream is a new record.

    Args:
        outputs: Outputs of a code cell

    Returns:
        list: Outputs with consecutive same-name streams merged
    """
    if not outputs:
        return []

    last = outputs[0]
    new_outputs = [last]

    for output in outputs[1:]:
        if (
            isinstance(output, StreamOutput)
            and isinstance(last, StreamOutput)
            and output.name == last.name
        ):
            last = last.model_copy(update={"text": _concat_text(last.text, output.text)})
            new_outputs[-1] = last
        else:
            new_outputs.append(output)
            last = output

    return new_outputs


def _concat_text(first: MultilineString, second: MultilineString) -> MultilineString:
    if isinstance(first, str):
        return first + join_text(second)
    return first + (second if isinstance(second, list) else [second])


def execution_count_attrs(cell: CodeCell) -> dict[str, str]:
    count = cell.execution_count
    if count is None:
        return {}
    return {
        "data-execution-count": str(count),
        # Only for backward compatibility with notebook.js.
        "data-prompt-number": str(count),
    }


class NotebookRenderer:
    """Render a notebook into an element tree.

    The renderer exposes one method per node of the notebook (cell types,
    output types, source). To modify how a node is rendered, subclass the
    renderer and override the corresponding method. The instance is callable,
    ``renderer(notebook)`` is the same as ``renderer.render(notebook)``.

    Example:
        >>> renderer = NotebookRenderer(ElementBuilder())
        >>> print(renderer(notebook).outer_html)
    """

    def __init__(
        self,
        element_builder: ElementBuilder,
        *,
        data_renderers: Optional[Mapping[str, DataRenderer]] = None,
        data_types_priority: Optional[Sequence[str]] = None,
        ansi_renderer: Optional[AnsiRenderer] = None,
        code_highlighter: Optional[CodeHighlighter] = None,
        markdown_renderer: Optional[MarkdownRenderer] = None,
        default_language: str = "python",
    ):
        """Initialize notebook renderer.

        Args:
            element_builder: Builder used for creating all elements
            data_renderers: Additional renderers indexed by a media type; they
                override built-in renderers of the same type
            data_types_priority: Media types in the priority order; when an
                output has multiple representations, the one with the lowest
                index is rendered (default: the user's types, then built-ins)
            ansi_renderer: Converts ANSI escape sequences in text to HTML; it
                gets the raw text, so it must escape HTML special characters
            code_highlighter: Highlights source code, ``(code, lang) -> html``;
                it gets the raw code, so it must escape HTML special characters
            markdown_renderer: Converts Markdown to HTML
            default_language: Language used when the notebook declares none
        """
        self.el = element_builder
        self.render_markdown = markdown_renderer or identity
        self.render_ansi_codes = ansi_renderer or escape_html
        self.highlight_code = code_highlighter or escape_html
        self.default_language = default_language

        merged = merge_data_renderers(self._builtin_data_renderers(), data_renderers)
        self.data_renderers = MappingProxyType(merged)
        self.data_types_priority = tuple(
            data_types_priority if data_types_priority is not None else merged
        )

    def _builtin_data_renderers(self) -> dict[str, DataRenderer]:
        el = self.el

        def embedded_image(fmt: str) -> DataRenderer:
            def render(data: str) -> Any:
                if URL_PATTERN.match(data):
                    src = data
                else:
                    encoded = data.replace("\n", "")
                    src = f"data:image/{fmt};base64,{encoded}"
                return el("img", {"class": "image-output", "src": src})

            return render

        def raw_html(tag: str, classes: list[str]) -> DataRenderer:
            return lambda data: el(tag, classes, data)

        return {
            "image/png": embedded_image("png"),
            "image/jpeg": embedded_image("jpeg"),
            "image/svg+xml": raw_html("div", ["svg-output"]),
            "text/svg+xml": lambda data: self.data_renderers["image/svg+xml"](data),
            "text/html": raw_html("div", ["html-output"]),
            "text/markdown": lambda data: el("div", ["html-output"], self.render_markdown(data)),
            "text/latex": raw_html("div", ["latex-output"]),
            "application/javascript": raw_html("script", []),
            "text/plain": lambda data: el("pre", ["text-output"], escape_html(data)),
        }

    def __call__(self, notebook: Union[Notebook, Mapping[str, Any]]) -> Any:
        return self.render(notebook)

    def render(self, notebook: Union[Notebook, Mapping[str, Any]]) -> Any:
        """Render the given notebook.

        Args:
            notebook: Notebook model, or the notebook's JSON as a mapping

        Returns:
            The root element (div.notebook) with one child per cell
        """
        if not isinstance(notebook, Notebook):
            notebook = Notebook.model_validate(notebook)

        children = [self.render_cell(cell, notebook) for cell in notebook.cells]
        return self.el("div", ["notebook"], children)

    def render_cell(self, cell: Any, notebook: Notebook) -> Any:
        if isinstance(cell, CodeCell):
            return self.render_code_cell(cell, notebook)
        if isinstance(cell, MarkdownCell):
            return self.render_markdown_cell(cell, notebook)
        if isinstance(cell, RawCell):
            return self.render_raw_cell(cell, notebook)

        logger.debug("Unsupported cell type: %r", getattr(cell, "cell_type", None))
        return self.el("div", ["unsupported"], "<!-- Unsupported cell type -->")

    def render_markdown_cell(self, cell: MarkdownCell, notebook: Notebook) -> Any:
        html = self.render_markdown(join_text(cell.source))
        return self.el("section", ["cell", "markdown-cell"], html)

    def render_raw_cell(self, cell: RawCell, notebook: Notebook) -> Any:
        return self.el("section", ["cell", "raw-cell"], join_text(cell.source))

    def render_code_cell(self, cell: CodeCell, notebook: Notebook) -> Any:
        source = self.render_source(cell, notebook) if cell.source else self.el("div")

        outputs = [self.render_output(output, cell) for output in coalesce_streams(cell.outputs)]

        return self.el("section", ["cell", "code-cell"], [source, *outputs])

    def notebook_language(self, notebook: Notebook) -> str:
        """Return the programming language of the notebook."""
        meta = notebook.metadata
        if meta.language_info and meta.language_info.name:
            return meta.language_info.name
        if meta.kernelspec and meta.kernelspec.language:
            return meta.kernelspec.language
        return self.default_language

    def render_source(self, cell: CodeCell, notebook: Notebook) -> Any:
        lang = self.notebook_language(notebook)
        html = self.highlight_code(join_text(cell.source), lang)

        code_el = self.el("code", {"class": f"lang-{lang}", "data-language": lang}, html)
        pre_el = self.el("pre", None, [code_el])

        # Class "input" is for backward compatibility with notebook.js.
        attrs = {**execution_count_attrs(cell), "class": "source input"}

        return self.el("div", attrs, [pre_el])

    def render_output(self, output: Any, cell: CodeCell) -> Any:
        if isinstance(output, DisplayData):
            inner_el = self.render_display_data(output)
        elif isinstance(output, ExecuteResult):
            inner_el = self.render_execute_result(output)
        elif isinstance(output, StreamOutput):
            inner_el = self.render_stream(output)
        elif isinstance(output, ErrorOutput):
            inner_el = self.render_error(output)
        else:
            logger.debug("Unsupported output type: %r", getattr(output, "output_type", None))
            inner_el = self.el("div", ["unsupported"], "<!-- Unsupported output type -->")

        attrs = {**execution_count_attrs(cell), "class": "output"}

        return self.el("div", attrs, [inner_el])

    def render_display_data(self, output: DisplayData) -> Any:
        return self._render_mime_bundle(output)

    def render_execute_result(self, output: ExecuteResult) -> Any:
        return self._render_mime_bundle(output)

    def _render_mime_bundle(self, output: Union[DisplayData, ExecuteResult]) -> Any:
        mime_type = self.resolve_data_type(output)
        if mime_type:
            return self.render_data(mime_type, join_text(output.data[mime_type]))

        logger.debug("No renderable data among: %s", ", ".join(output.data) or "(empty)")
        return self.el("div", ["empty-output"])

    def render_error(self, error: ErrorOutput) -> Any:
        html = self.render_ansi_codes("\n".join(error.traceback))
        # Class "pyerr" is for backward compatibility with notebook.js.
        return self.el("pre", ["error", "pyerr"], html)

    def render_stream(self, stream: StreamOutput) -> Any:
        html = self.render_ansi_codes(join_text(stream.text))
        return self.el("pre", [stream.name], html)

    def render_data(self, mime_type: str, data: str) -> Any:
        """Render the data using the renderer registered for the MIME type.

        Raises:
            MissingRendererError: If no renderer is registered for mime_type
        """
        render = self.data_renderers.get(mime_type)
        if render is None:
            raise MissingRendererError(mime_type)
        return render(data)

    def resolve_data_type(self, output: Union[DisplayData, ExecuteResult]) -> Optional[str]:
        """Return the media type of the output's data to render, if any."""
        return resolve_data_type(output.data, self.data_types_priority, self.data_renderers)
