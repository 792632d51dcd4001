"""nbrender - Render Jupyter notebooks into HTML element trees.

Walks the cells and outputs of a notebook and builds one element per node,
with pluggable Markdown, ANSI, code highlighting and media-type renderers.
"""

__version__ = "0.1.0"


class NbRenderError(Exception):
    """Base exception for all nbrender errors."""

    pass


class NotebookParseError(NbRenderError):
    """Raised when reading or validating a notebook fails."""

    pass


class MissingRendererError(NbRenderError, LookupError):
    """Raised when no renderer is registered for a resolved MIME type."""

    def __init__(self, mime_type: str):
        super().__init__(f"Missing renderer for MIME type: {mime_type}")
        self.mime_type = mime_type


class ConfigurationError(NbRenderError):
    """Raised when configuration is invalid."""

    pass
