"""Integration tests for the full nbrender pipeline."""

import nbformat
import pytest

from nbrender.parsing import NotebookReader
from nbrender.pipeline import create_renderer
from nbrender.title import read_notebook_title


@pytest.fixture
def analysis_notebook_file(tmp_path):
    """Notebook with most cell and output kinds."""
    nb = nbformat.v4.new_notebook()
    nb.metadata["kernelspec"] = {"name": "python3", "display_name": "Python 3", "language": "python"}

    nb.cells.append(
        nbformat.v4.new_markdown_cell(
            "# First Principles: Linear Regression\n\n"
            "Starting from $y \\approx wx + b$, the least squares solution is\n\n"
            "$$w = \\frac{\\sum_i x_i y_i}{\\sum_i x_i^2}$$"
        )
    )

    cell = nbformat.v4.new_code_cell("for i in range(2):\n    print(i)", execution_count=1)
    cell.outputs = [
        nbformat.v4.new_output("stream", name="stdout", text="0\n"),
        nbformat.v4.new_output("stream", name="stdout", text="1\n"),
    ]
    nb.cells.append(cell)

    cell = nbformat.v4.new_code_cell("df", execution_count=2)
    cell.outputs = [
        nbformat.v4.new_output(
            "execute_result",
            data={"text/plain": "   a\n0  1", "text/html": "<table><tr><td>1</td></tr></table>"},
            execution_count=2,
        )
    ]
    nb.cells.append(cell)

    cell = nbformat.v4.new_code_cell("1 / 0", execution_count=3)
    cell.outputs = [
        nbformat.v4.new_output(
            "error",
            ename="ZeroDivisionError",
            evalue="division by zero",
            traceback=["\x1b[0;31mZeroDivisionError\x1b[0m: division by zero"],
        )
    ]
    nb.cells.append(cell)

    nb.cells.append(nbformat.v4.new_raw_cell("<hr/>"))

    path = tmp_path / "analysis.ipynb"
    with open(path, "w", encoding="utf-8") as f:
        nbformat.write(nb, f)
    return path


class TestFullPipeline:
    """Tests for rendering notebook files end to end."""

    def test_render_notebook_file(self, analysis_notebook_file):
        """Test a notebook file is rendered into one element per cell."""
        notebook = NotebookReader().read(analysis_notebook_file)

        root = create_renderer()(notebook)

        assert root.class_name == "nb-notebook"
        assert [child.class_name for child in root.children] == [
            "nb-cell nb-markdown-cell",
            "nb-cell nb-code-cell",
            "nb-cell nb-code-cell",
            "nb-cell nb-code-cell",
            "nb-cell nb-raw-cell",
        ]

    def test_rendered_content(self, analysis_notebook_file):
        """Test the content of each kind of cell."""
        notebook = NotebookReader().read(analysis_notebook_file)

        markdown_el, loop_el, table_el, error_el, raw_el = create_renderer()(notebook).children

        assert 'id="first-principles-linear-regression"' in markdown_el.html
        assert markdown_el.html.count("<math") == 2
        assert 'display="block"' in markdown_el.html

        # Two stdout chunks are merged into one output.
        assert len(loop_el.children) == 2
        assert loop_el.children[1].outer_html == (
            '<div data-execution-count="1" data-prompt-number="1" class="nb-output">'
            '<pre class="nb-stdout">0\n1\n</pre></div>'
        )

        assert table_el.children[1].children[0].outer_html == (
            '<div class="nb-html-output"><table><tr><td>1</td></tr></table></div>'
        )

        assert error_el.children[1].children[0].outer_html == (
            '<pre class="nb-error nb-pyerr">'
            '<span class="ansi-red-fg">ZeroDivisionError</span>: division by zero</pre>'
        )

        assert raw_el.html == "<hr/>"

    def test_rendering_is_repeatable(self, analysis_notebook_file):
        """Test rendering the same notebook twice gives the same tree."""
        notebook = NotebookReader().read(analysis_notebook_file)
        render = create_renderer()

        assert render(notebook) == render(notebook)

    def test_title(self, analysis_notebook_file):
        notebook = NotebookReader().read(analysis_notebook_file)

        assert read_notebook_title(notebook) == "First Principles: Linear Regression"
