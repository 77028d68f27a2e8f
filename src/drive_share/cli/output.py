"""Output mode management for CLI."""

import contextvars
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for CLI commands."""

    HUMAN = "human"  # Rich console output
    JSON = "json"  # Machine-readable JSON output


_output_mode_var: contextvars.ContextVar[OutputMode] = contextvars.ContextVar(
    "output_mode", default=OutputMode.HUMAN
)


def set_output_mode(mode: OutputMode) -> None:
    """Set the output mode for the current context."""
    _output_mode_var.set(mode)


def get_output_mode() -> OutputMode:
    """Get the current output mode (defaults to HUMAN)."""
    return _output_mode_var.get()
