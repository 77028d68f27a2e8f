"""CLI application for Drive Share."""

import sys
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console

from .. import __version__
from ..settings import settings
from .commands import folder, props, sweep, upload
from .output import OutputMode, set_output_mode

console = Console()

app = typer.Typer(
    name="dshare",
    help="Drive Share - Upload files to Google Drive, share them and notify recipients",
    add_completion=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]drive-share[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity. Use -v for DEBUG, -vv for TRACE.",
        ),
    ] = 0,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Set log level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output in JSON format (machine-readable)"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = False,
) -> None:
    """Drive Share - Upload files to Google Drive, share them and notify recipients."""
    set_output_mode(OutputMode.JSON if json_output else OutputMode.HUMAN)

    if log_level:
        level = log_level.upper()
    elif verbose >= 2:
        level = "TRACE"
    elif verbose == 1:
        level = "DEBUG"
    else:
        level = settings.log_level

    if level != settings.log_level:
        logger.remove()
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan> - <level>{message}</level>"
            ),
            level=level,
            colorize=True,
        )


app.command()(upload)
app.command()(sweep)
app.command()(folder)
app.command()(props)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold blue]drive-share[/bold blue] version [green]{__version__}[/green]")
