"""Jupyter notebook reading functionality."""

import logging
import sys
from pathlib import Path
from typing import IO, Any

import nbformat
from pydantic import ValidationError

from nbrender import NotebookParseError
from nbrender.models import Notebook

logger = logging.getLogger(__name__)


class NotebookReader:
    """Reader for Jupyter notebooks.

    Reads .ipynb files using nbformat (converting older formats to v4) and
    validates them into the ``Notebook`` model.
    """

    def read(self, filepath: Path | str) -> Notebook:
        """Read a Jupyter notebook file.

        Args:
            filepath: Path to the .ipynb file, or "-" for stdin

        Returns:
            Notebook: Parsed notebook

        Raises:
            NotebookParseError: If reading or parsing fails
        """
        if str(filepath) == "-":
            return self.read_stream(sys.stdin, "<stdin>")

        filepath = Path(filepath)

        if not filepath.exists():
            raise NotebookParseError(f"Notebook file not found: {filepath}")

        with open(filepath, "r", encoding="utf-8") as f:
            return self.read_stream(f, str(filepath))

    def read_stream(self, stream: IO[str], name: str = "<stream>") -> Notebook:
        """Read a Jupyter notebook from an open text stream.

        Args:
            stream: Stream with the notebook JSON
            name: Name of the source used in error messages

        Returns:
            Notebook: Parsed notebook

        Raises:
            NotebookParseError: If reading or parsing fails
        """
        try:
            nb = nbformat.read(stream, as_version=4)
        except Exception as e:
            raise NotebookParseError(f"Failed to read notebook {name}: {e}") from e

        return self.parse(nb, name)

    def reads(self, text: str, name: str = "<string>") -> Notebook:
        """Read a Jupyter notebook from a JSON string."""
        try:
            nb = nbformat.reads(text, as_version=4)
        except Exception as e:
            raise NotebookParseError(f"Failed to read notebook {name}: {e}") from e

        return self.parse(nb, name)

    def parse(self, data: dict[str, Any], name: str = "<dict>") -> Notebook:
        """Validate notebook JSON into the Notebook model.

        Raises:
            NotebookParseError: If the data does not describe a notebook
        """
        try:
            notebook = Notebook.model_validate(data)
        except ValidationError as e:
            raise NotebookParseError(f"Failed to parse notebook {name}: {e}") from e

        logger.debug("Read notebook %s with %d cells", name, len(notebook.cells))
        return notebook
