"""Hiding math expressions from a Markdown parser.

Math expressions are replaced with numbered markers (``@@1@@``, ``@@2@@``, ...)
before the Markdown text is parsed, so that the parser does not mangle TeX
(underscores, asterisks, backslashes). After parsing, the markers are replaced
with the rendered math.

The scanning algorithm follows the one used by the classic Jupyter Notebook
(``mathjaxutils.js``), which in turn comes from MathJax and StackExchange:

- math delimiters must match and braces inside math must balance,
- math may not span a paragraph break (a blank line) unless braces are open,
- dollar signs inside inline code spans and fenced code blocks are ignored.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence


@dataclass(frozen=True)
class MathExpression:
    """A math expression extracted from text.

    Attributes:
        raw: The expression including its delimiters
        value: The expression without delimiters, trimmed
        display_mode: True for block math, False for inline math
    """

    raw: str
    value: str
    display_mode: bool


# Math delimiters and the special symbols needed to find math in the text.
MATH_SPLIT_PATTERN = re.compile(
    r"(\$\$?|\\(?:begin|end)\{[a-z]*\*?\}|\\[{}$]|[{}]|(?:\n\s*)+|\\\\(?:\(|\)|\[|\]))",
    re.IGNORECASE,
)
PARAGRAPH_BREAK_PATTERN = re.compile(r"\n.*\n")
MARKER_LIKE_PATTERN = re.compile(r"@@(\d+)@@")
MARKER_PATTERN = re.compile(r"@@([1-9][0-9]*)@@")
ESCAPED_MARKER_PATTERN = re.compile(r"@@0(\d+)@@")

INLINE_CODE_PATTERN = re.compile(r"(^|[^\\])(`+)([^\n]*?[^`\n])\2(?!`)", re.MULTILINE)
FENCED_CODE_PATTERN = re.compile(r"^\s{0,3}(`{3,})(?:.|\n)*?\1", re.MULTILINE)
ESCAPED_CODE_PATTERN = re.compile(r"~([TD])")

# Opening delimiter -> display mode. Longer delimiters must come first.
DELIMITERS = {
    "$$": True,
    "$": False,
    "\\\\[": True,
    "\\\\(": False,
}


def parse_delimited_math(raw: str) -> MathExpression:
    """Parse a string that may contain a delimited math expression.

    Args:
        raw: Math chunk as extracted by ``extract_math``

    Returns:
        MathExpression: Parsed expression; a chunk without a known delimiter
        (e.g. ``\\begin{..}...\\end{..}``) is kept whole in display mode
    """
    for delim, display_mode in DELIMITERS.items():
        if raw.startswith(delim):
            value = raw[len(delim):-len(delim)].strip()
            return MathExpression(raw=raw, value=value, display_mode=display_mode)

    return MathExpression(raw=raw, value=raw, display_mode=True)


def _escape_dollars(match: re.Match) -> str:
    return match.group(0).replace("$", "~D")


def escape_codes(text: str) -> str:
    """Escape dollar signs inside inline code spans and fenced code blocks.

    Except for extreme edge cases, this catches precisely those pieces of the
    Markdown source that will later be turned into code spans, e.g.:

        `$foo` and `$bar` are variables.
    """
    text = text.replace("~", "~T")
    text = INLINE_CODE_PATTERN.sub(_escape_dollars, text)
    return FENCED_CODE_PATTERN.sub(_escape_dollars, text)


def unescape_codes(text: str) -> str:
    """Revert escaping performed by ``escape_codes``."""
    return ESCAPED_CODE_PATTERN.sub(lambda m: "~" if m.group(1) == "T" else "$", text)


def _no_unescape(text: str) -> str:
    return text


def _process_math(
    unescape: Callable[[str], str],
    math: list[str],
    blocks: list[str],
    start: int,
    end: int,
) -> None:
    """Collapse blocks[start:end + 1] into one marker and store the math."""
    block = "".join(blocks[start:end + 1])
    for i in range(start + 1, end + 1):
        blocks[i] = ""

    math.append(unescape(block))
    blocks[start] = f"@@{len(math)}@@"


def extract_math(text: str) -> tuple[str, list[MathExpression]]:
    """Extract delimited math expressions from the given text.

    Each expression is substituted with a numbered marker. Sequences already
    looking like a marker (``@@\\d+@@``) are escaped by adding a zero before
    the number; ``restore_math`` unescapes them.

    Args:
        text: Markdown text

    Returns:
        tuple: Text with markers, and the extracted expressions in order
    """
    text = MARKER_LIKE_PATTERN.sub(r"@@0\1@@", text)

    unescape = _no_unescape
    if "`" in text:
        text = escape_codes(text)
        unescape = unescape_codes

    math: list[str] = []

    blocks = MATH_SPLIT_PATTERN.split(re.sub(r"\r\n?", "\n", text))

    start_idx: Optional[int] = None  # index of the block where the current math starts
    last_idx: Optional[int] = None  # index of the last end delimiter seen with open braces
    end_delim: Optional[str] = None
    braces = 0

    i = 1
    while i < len(blocks):
        block = blocks[i]

        if start_idx is not None:
            # In math: look for the end delimiter, balance braces and do not
            # go past a paragraph break.
            if block == end_delim:
                if braces:
                    last_idx = i
                else:
                    _process_math(unescape, math, blocks, start_idx, i)
                    start_idx = end_delim = last_idx = None
            elif block == "{":
                braces += 1
            elif block == "}":
                if braces:
                    braces -= 1
            elif PARAGRAPH_BREAK_PATTERN.search(block):
                if last_idx is not None:
                    i = last_idx
                    _process_math(unescape, math, blocks, start_idx, i)
                start_idx = end_delim = last_idx = None
                braces = 0
        else:
            # Look for a math start delimiter and set up the end delimiter.
            if block in ("$", "$$"):
                start_idx = i
                end_delim = block
                braces = 0
            elif block in ("\\\\(", "\\\\["):
                start_idx = i
                end_delim = "\\\\)" if block.endswith("(") else "\\\\]"
                braces = 0
            elif block.startswith("\\begin"):
                start_idx = i
                end_delim = "\\end" + block[6:]
                braces = 0

        i += 2

    if last_idx is not None:
        _process_math(unescape, math, blocks, start_idx or 0, last_idx)

    return unescape("".join(blocks)), [parse_delimited_math(raw) for raw in math]


def restore_math(text: str, math: Sequence[str]) -> str:
    """Replace math markers with the given strings and unescape marker-like text.

    Args:
        text: Text with markers produced by ``extract_math``
        math: Replacement for each marker, ``math[n - 1]`` for ``@@n@@``;
            markers without a replacement are removed

    Returns:
        str: Text with the markers replaced
    """

    def replace(match: re.Match) -> str:
        n = int(match.group(1))
        return math[n - 1] if n <= len(math) else ""

    text = MARKER_PATTERN.sub(replace, text)
    return ESCAPED_MARKER_PATTERN.sub(r"@@\1@@", text)
