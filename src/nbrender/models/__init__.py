"""Data models for nbrender."""

from nbrender.models.element import Element
from nbrender.models.notebook import (
    Cell,
    CodeCell,
    DisplayData,
    ErrorOutput,
    ExecuteResult,
    KernelSpec,
    LanguageInfo,
    MarkdownCell,
    MimeBundle,
    MultilineString,
    Notebook,
    NotebookMetadata,
    Output,
    RawCell,
    StreamOutput,
    UnknownCell,
    UnknownOutput,
)

__all__ = [
    "Element",
    "Cell",
    "CodeCell",
    "MarkdownCell",
    "RawCell",
    "UnknownCell",
    "Output",
    "DisplayData",
    "ExecuteResult",
    "StreamOutput",
    "ErrorOutput",
    "UnknownOutput",
    "MimeBundle",
    "MultilineString",
    "Notebook",
    "NotebookMetadata",
    "KernelSpec",
    "LanguageInfo",
]
