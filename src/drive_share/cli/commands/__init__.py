"""CLI commands for Drive Share."""

from .drive import folder, sweep, upload
from .properties import props

__all__ = [
    "folder",
    "props",
    "sweep",
    "upload",
]
