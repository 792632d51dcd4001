"""Pytest configuration and fixtures."""

import nbformat
import pytest

from nbrender.config import reset_config
from nbrender.rendering.elements import ElementBuilder


@pytest.fixture(autouse=True)
def reset_config_after_test(monkeypatch):
    """Reset global config after each test and ignore the developer's env."""
    monkeypatch.delenv("NBRENDER_CLASS_PREFIX", raising=False)
    monkeypatch.delenv("NBRENDER_DATA_TYPES_PRIORITY", raising=False)
    yield
    reset_config()


@pytest.fixture
def el():
    """Element builder without class prefix."""
    return ElementBuilder(class_prefix="")


@pytest.fixture
def sample_notebook_data():
    """Sample notebook data for testing."""
    return {
        "cells": [
            {
                "cell_type": "markdown",
                "source": ["# Linear Regression\n", "\n", "Fitting $y = wx + b$."],
                "metadata": {},
            },
            {
                "cell_type": "raw",
                "source": "<p>Allons-y!</p>",
                "metadata": {"format": "text/html"},
            },
            {
                "cell_type": "code",
                "execution_count": 1,
                "source": ["import numpy as np\n", "print(np.pi)"],
                "outputs": [
                    {"output_type": "stream", "name": "stdout", "text": ["3.14"]},
                    {"output_type": "stream", "name": "stdout", "text": ["159\n"]},
                    {"output_type": "stream", "name": "stderr", "text": "warning\n"},
                ],
                "metadata": {},
            },
            {
                "cell_type": "code",
                "execution_count": 2,
                "source": "np.array([1, 2])",
                "outputs": [
                    {
                        "output_type": "execute_result",
                        "execution_count": 2,
                        "data": {
                            "text/plain": "array([1, 2])",
                            "text/html": "<b>array</b>",
                        },
                        "metadata": {},
                    },
                    {
                        "output_type": "error",
                        "ename": "ValueError",
                        "evalue": "bad",
                        "traceback": ["ValueError", "  bad <input>"],
                    },
                ],
                "metadata": {},
            },
        ],
        "metadata": {
            "kernelspec": {
                "display_name": "Python 3",
                "language": "python",
                "name": "python3",
            },
            "language_info": {"name": "python"},
        },
        "nbformat": 4,
        "nbformat_minor": 4,
    }


@pytest.fixture
def sample_notebook_file(tmp_path):
    """Create a sample notebook file for testing."""
    nb = nbformat.v4.new_notebook()
    nb.metadata["language_info"] = {"name": "python"}

    nb.cells.append(
        nbformat.v4.new_markdown_cell("# Least Squares\n\nMinimize $\\sum_i e_i^2$.")
    )

    code_cell = nbformat.v4.new_code_cell("print('hello')", execution_count=1)
    code_cell.outputs = [
        nbformat.v4.new_output("stream", name="stdout", text="hello\n"),
        nbformat.v4.new_output(
            "display_data",
            data={
                "image/png": "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg==",
                "text/plain": "<Figure>",
            },
        ),
    ]
    nb.cells.append(code_cell)

    notebook_path = tmp_path / "test_notebook.ipynb"
    with open(notebook_path, "w", encoding="utf-8") as f:
        nbformat.write(nb, f)

    return notebook_path
