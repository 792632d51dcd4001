"""Reading the title of a notebook."""

from collections.abc import Mapping
from typing import Any, Union

from markdown_it import MarkdownIt

from nbrender.models import MarkdownCell, Notebook
from nbrender.rendering.utils import join_text, plain_text

# Markdown rules enabled for finding the title. Apart from headings, only the
# constructs that could hide or contain a heading (code blocks, quotes, lists)
# or that format the heading text are parsed; everything else is left as
# plain paragraphs.
TITLE_PARSER_RULES = (
    "heading",
    "lheading",
    "fence",
    "code",
    "blockquote",
    "list",
    "emphasis",
    "backticks",
    "escape",
    "entity",
    "link",
    "image",
)

_title_parser = MarkdownIt("zero").enable(list(TITLE_PARSER_RULES))


def find_main_heading(markdown: str) -> str:
    """Return the text of the first level 1 heading, without formatting.

    Args:
        markdown: Markdown source

    Returns:
        str: Heading text, or an empty string if there is no level 1 heading
        or the first one is nested in a quote or a list
    """
    tokens = _title_parser.parse(markdown)

    for idx, token in enumerate(tokens):
        if token.type == "heading_open" and token.tag == "h1":
            if token.level > 0:
                return ""
            inline = tokens[idx + 1]
            return plain_text(inline.children).strip()
    return ""


def read_notebook_title(notebook: Union[Notebook, Mapping[str, Any]]) -> str:
    """Return title of the given notebook, or an empty string if not found.

    If the title is not present in the notebook's metadata and the first cell
    is a Markdown cell, it returns the first level 1 heading of that cell.

    Args:
        notebook: Notebook model, or the notebook's JSON as a mapping

    Returns:
        str: The notebook title
    """
    if not isinstance(notebook, Notebook):
        notebook = Notebook.model_validate(notebook)

    if notebook.metadata.title:
        return notebook.metadata.title

    if notebook.cells and isinstance(notebook.cells[0], MarkdownCell):
        return find_main_heading(join_text(notebook.cells[0].source))

    return ""
