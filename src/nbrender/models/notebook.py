"""Data models for Jupyter notebooks (nbformat v4).

The models are frozen: a renderer only ever reads a notebook. Unknown keys are
kept, and cells or outputs of a type this package does not know about are
parsed into ``UnknownCell`` / ``UnknownOutput`` instead of failing validation.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

# Text stored either as a single string or as a list of line fragments.
MultilineString = Union[str, list[str]]

# Alternative representations of one output keyed by media type.
MimeBundle = dict[str, Any]


class NotebookNode(BaseModel):
    """Base class for all notebook models."""

    model_config = ConfigDict(extra="allow", frozen=True)


class KernelSpec(NotebookNode):
    """Kernel information.

    Attributes:
        name: Name of the kernel specification
        display_name: Name to display in UI
        language: Programming language of the kernel
    """

    name: str = ""
    display_name: str = ""
    language: Optional[str] = None


class LanguageInfo(NotebookNode):
    """Kernel language information.

    Attributes:
        name: The programming language which this kernel runs
    """

    name: str


class NotebookMetadata(NotebookNode):
    """Notebook root-level metadata.

    Attributes:
        title: The title of the notebook document
        authors: The author(s) of the notebook document
        kernelspec: Kernel information
        language_info: Kernel language information
    """

    title: Optional[str] = None
    authors: Optional[list[Any]] = None
    kernelspec: Optional[KernelSpec] = None
    language_info: Optional[LanguageInfo] = None


# ---------------------------------------------------------------- outputs


class StreamOutput(NotebookNode):
    """Stream output from a code cell (stdout, stderr)."""

    output_type: Literal["stream"] = "stream"
    name: str
    text: MultilineString


class DisplayData(NotebookNode):
    """Data displayed as a result of code cell execution."""

    output_type: Literal["display_data"] = "display_data"
    data: MimeBundle = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)


class ExecuteResult(NotebookNode):
    """Result of executing a code cell."""

    output_type: Literal["execute_result"] = "execute_result"
    data: MimeBundle = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    execution_count: Optional[int] = None


class ErrorOutput(NotebookNode):
    """Output of an error that occurred during code cell execution."""

    output_type: Literal["error"] = "error"
    ename: str = ""
    evalue: str = ""
    traceback: list[str] = Field(default_factory=list)


class UnknownOutput(NotebookNode):
    """Output of a type not defined by nbformat v4."""

    output_type: str


OUTPUT_TYPES = frozenset({"stream", "display_data", "execute_result", "error"})


def _output_tag(value: Any) -> str:
    if isinstance(value, dict):
        output_type = value.get("output_type")
    else:
        output_type = getattr(value, "output_type", None)
    return output_type if output_type in OUTPUT_TYPES else "unknown"


Output = Annotated[
    Union[
        Annotated[StreamOutput, Tag("stream")],
        Annotated[DisplayData, Tag("display_data")],
        Annotated[ExecuteResult, Tag("execute_result")],
        Annotated[ErrorOutput, Tag("error")],
        Annotated[UnknownOutput, Tag("unknown")],
    ],
    Discriminator(_output_tag),
]


# ------------------------------------------------------------------ cells


class MarkdownCell(NotebookNode):
    """Notebook markdown cell."""

    cell_type: Literal["markdown"] = "markdown"
    source: MultilineString = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class RawCell(NotebookNode):
    """Notebook raw nbconvert cell."""

    cell_type: Literal["raw"] = "raw"
    source: MultilineString = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class CodeCell(NotebookNode):
    """Notebook code cell.

    Attributes:
        source: Contents of the cell
        execution_count: The cell's prompt number, None if not executed
        outputs: Execution, display, or stream outputs
        metadata: Cell-level metadata
    """

    cell_type: Literal["code"] = "code"
    source: MultilineString = ""
    execution_count: Optional[int] = None
    outputs: list[Output] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class UnknownCell(NotebookNode):
    """Cell of a type not defined by nbformat v4."""

    cell_type: str
    source: MultilineString = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


CELL_TYPES = frozenset({"markdown", "raw", "code"})


def _cell_tag(value: Any) -> str:
    if isinstance(value, dict):
        cell_type = value.get("cell_type")
    else:
        cell_type = getattr(value, "cell_type", None)
    return cell_type if cell_type in CELL_TYPES else "unknown"


Cell = Annotated[
    Union[
        Annotated[MarkdownCell, Tag("markdown")],
        Annotated[RawCell, Tag("raw")],
        Annotated[CodeCell, Tag("code")],
        Annotated[UnknownCell, Tag("unknown")],
    ],
    Discriminator(_cell_tag),
]


class Notebook(NotebookNode):
    """Jupyter Notebook v4.

    Attributes:
        metadata: Notebook root-level metadata
        nbformat: Notebook format (major number)
        nbformat_minor: Notebook format (minor number)
        cells: Cells of the notebook in display order
    """

    metadata: NotebookMetadata = Field(default_factory=NotebookMetadata)
    nbformat: int = 4
    nbformat_minor: int = 0
    cells: list[Cell] = Field(default_factory=list)
