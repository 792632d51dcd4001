"""Command-line interface for nbrender."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from nbrender import NbRenderError, __version__
from nbrender.config import get_config, override_config
from nbrender.models import CodeCell, DisplayData, ExecuteResult, StreamOutput
from nbrender.parsing.notebook import NotebookReader
from nbrender.pipeline import create_renderer
from nbrender.rendering.renderer import coalesce_streams
from nbrender.title import read_notebook_title

console = Console()
err_console = Console(stderr=True)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=debug)],
        force=True,
    )


def _fail(error: Exception, debug: bool) -> None:
    if debug:
        err_console.print_exception()
    else:
        err_console.print(f"[red]Error:[/red] {error}")
    sys.exit(1)


notebook_argument = click.argument(
    "notebook", type=click.Path(exists=True, allow_dash=True, path_type=Path)
)
debug_option = click.option("--debug", "-d", is_flag=True, help="Print debug messages.")


@click.group()
@click.version_option(version=__version__)
def main():
    """nbrender - Render Jupyter notebooks to HTML.

    Reads notebooks in format 4.0+ (older formats are converted).
    """
    pass


@main.command()
@notebook_argument
@click.argument("output", type=click.Path(path_type=Path), required=False)
@click.option(
    "--class-prefix",
    type=str,
    default=None,
    help="Prefix for CSS class names (default: from config or nb-)",
)
@click.option("--no-math", is_flag=True, help="Do not render math in Markdown.")
@debug_option
def convert(
    notebook: Path,
    output: Optional[Path],
    class_prefix: Optional[str],
    no_math: bool,
    debug: bool,
):
    """Render a notebook to an HTML fragment.

    NOTEBOOK: Path to the .ipynb file, or "-" for stdin

    OUTPUT: File to write the HTML into (default: stdout)
    """
    _setup_logging(debug)
    try:
        config = get_config()
        updates = {}
        if class_prefix is not None:
            updates["class_prefix"] = class_prefix
        if no_math:
            updates["render_math"] = False
        if updates:
            config = override_config(config, **updates)

        parsed = NotebookReader().read(notebook)
        html = create_renderer(config=config)(parsed).outer_html

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(html + "\n", encoding="utf-8")
            err_console.print(f"[green]✓[/green] Wrote {output}")
        else:
            click.echo(html)

    except (NbRenderError, OSError) as e:
        _fail(e, debug)


@main.command()
@notebook_argument
@debug_option
def title(notebook: Path, debug: bool):
    """Print the title of a notebook.

    Uses the title from the metadata, or the first level 1 heading of the
    first cell if it is a Markdown cell.
    """
    _setup_logging(debug)
    try:
        parsed = NotebookReader().read(notebook)
        click.echo(read_notebook_title(parsed) or "Notebook")
    except NbRenderError as e:
        _fail(e, debug)


@main.command()
@notebook_argument
@debug_option
def inspect(notebook: Path, debug: bool):
    """Show the cells of a notebook and how their outputs will be rendered."""
    _setup_logging(debug)
    try:
        parsed = NotebookReader().read(notebook)
        renderer = create_renderer()
    except NbRenderError as e:
        _fail(e, debug)

    table = Table(title=f"{notebook} ({renderer.notebook_language(parsed)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Exec", justify="right")
    table.add_column("Outputs")

    for index, cell in enumerate(parsed.cells):
        outputs = []
        exec_count = ""
        if isinstance(cell, CodeCell):
            exec_count = "" if cell.execution_count is None else str(cell.execution_count)
            for output in coalesce_streams(cell.outputs):
                if isinstance(output, (DisplayData, ExecuteResult)):
                    mime_type = renderer.resolve_data_type(output) or "[red]empty[/red]"
                    outputs.append(f"{output.output_type}: {mime_type}")
                elif isinstance(output, StreamOutput):
                    outputs.append(f"stream: {output.name}")
                else:
                    outputs.append(output.output_type)

        table.add_row(str(index), cell.cell_type, exec_count, "\n".join(outputs))

    console.print(table)
    console.print(f"Title: [bold]{read_notebook_title(parsed) or '(none)'}[/bold]")


@main.command()
def config_show():
    """Show the current configuration."""
    try:
        config = get_config()
    except NbRenderError as e:
        _fail(e, debug=False)

    table = Table(title="nbrender configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name, value in config.model_dump().items():
        table.add_row(name, "[dim]default[/dim]" if value is None else repr(value))

    console.print(table)


if __name__ == "__main__":
    main()
