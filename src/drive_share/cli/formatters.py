"""Output formatters for CLI commands."""

import json
import sys
from abc import ABC, abstractmethod

from rich.console import Console
from rich.table import Table

from .output import OutputMode
from .schemas import CommandOutput, FolderOutput, PropertiesOutput, SweepOutput, UploadOutput


class BaseOutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def print_progress(self, message: str) -> None:
        """Print a progress message."""

    @abstractmethod
    def print_error(self, message: str) -> None:
        """Print an error message."""

    @abstractmethod
    def print_warning(self, message: str) -> None:
        """Print a warning message."""

    @abstractmethod
    def print_result(self, result: CommandOutput) -> None:
        """Print the final command result."""


class HumanOutputFormatter(BaseOutputFormatter):
    """Formatter for human-readable Rich console output."""

    def __init__(self) -> None:
        self.console = Console()

    def print_progress(self, message: str) -> None:
        self.console.print(message)

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/yellow]")

    def print_result(self, result: CommandOutput) -> None:
        """Print the final command result with Rich formatting."""
        if not result.success:
            self.console.print(f"[yellow]{result.command} completed with errors[/yellow]")
            for error in result.errors:
                self.console.print(f"  [red]{error}[/red]")
            return

        if isinstance(result, UploadOutput):
            self._print_upload_result(result)
        elif isinstance(result, SweepOutput):
            self._print_sweep_result(result)
        elif isinstance(result, FolderOutput):
            self.console.print(f"[green]Folder '{result.folder_name}':[/green] [cyan]{result.folder_id}[/cyan]")
        elif isinstance(result, PropertiesOutput):
            self._print_properties_result(result)
        else:
            self.console.print(f"[dim]{result.model_dump_json(indent=2)}[/dim]")

    def _print_upload_result(self, result: UploadOutput) -> None:
        self.console.print(f"\n[green]✓ Uploaded {result.file_name} and shared with {result.recipient}[/green]")
        self.console.print(f"  ID: [cyan]{result.file_id}[/cyan]")
        self.console.print(f"  Type: [dim]{result.mime_type}[/dim]")
        if result.web_view_link:
            self.console.print(f"  Link: [blue]{result.web_view_link}[/blue]")

    def _print_sweep_result(self, result: SweepOutput) -> None:
        if result.skipped:
            self.console.print("[dim]No retention window configured, nothing to clean up[/dim]")
            return
        self.console.print(
            f"\n[green]✓ Scanned {result.scanned} file(s), deleted {len(result.deleted)}[/green] "
            f"[dim](older than {result.retention_days} day(s))[/dim]"
        )
        for file_id in result.failed:
            self.console.print(f"  [red]Could not delete {file_id}[/red]")
        if result.warning:
            self.console.print(f"  [yellow]{result.warning}[/yellow]")

    def _print_properties_result(self, result: PropertiesOutput) -> None:
        if result.action != "show":
            keys = ", ".join(prop.key for prop in result.properties)
            self.console.print(f"[green]✓ {result.action.capitalize()} {keys} for product {result.product}[/green]")
            return
        if not result.properties:
            self.console.print(f"[yellow]No properties set for product {result.product}[/yellow]")
            return

        table = Table(title=f"Properties for {result.product}", show_header=True, header_style="bold cyan")
        table.add_column("Key", style="green")
        table.add_column("Value")
        for prop in result.properties:
            table.add_row(prop.key, prop.value if prop.value is not None else "[dim](not set)[/dim]")
        self.console.print(table)


class JSONOutputFormatter(BaseOutputFormatter):
    """Formatter for machine-readable JSON output."""

    def print_progress(self, message: str) -> None:
        """Suppress progress messages in JSON mode."""

    def print_error(self, message: str) -> None:
        print(f"ERROR: {message}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def print_result(self, result: CommandOutput) -> None:
        output = result.model_dump(mode="json", exclude_none=False)
        print(json.dumps(output, indent=2))


def get_formatter(mode: OutputMode) -> BaseOutputFormatter:
    """Get the appropriate formatter for the given output mode."""
    if mode == OutputMode.JSON:
        return JSONOutputFormatter()
    return HumanOutputFormatter()
