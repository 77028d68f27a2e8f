"""Drive Share - upload, share and notify toolkit for Google Drive.

This package provides:
- DriveUploader: uploads a file into a per-product Drive folder, shares it
  with a recipient and emails them the link
- CLI tool (dshare): command-line interface for uploads, sweeps and properties

Basic usage::

    from drive_share import DriveShareConfig, DriveUploader, GmailNotifier, GoogleClientFactory
    from pathlib import Path

    from drive_share.core.properties import FilePropertyStore

    store = FilePropertyStore(Path("properties.yaml"))
    config = DriveShareConfig(collaborator_email="admin@example.com")
    clients = GoogleClientFactory(store, config)
    uploader = DriveUploader(store, GmailNotifier(clients), config, clients)
    uploader.upload_file(Path("report.xlsx"), "someone@example.com", "P1")

CLI usage::

    dshare upload report.xlsx --to someone@example.com --product P1
    dshare sweep --product P1
    dshare props show --product P1
"""

from .core.client import GoogleClientFactory
from .core.config import DriveShareConfig
from .core.notifier import GmailNotifier, Notifier
from .core.types import MimeType, RemoteFile
from .core.uploader import DriveUploader

__version__ = "0.1.0"

__all__ = [
    "DriveUploader",
    "DriveShareConfig",
    "GoogleClientFactory",
    "GmailNotifier",
    "Notifier",
    "MimeType",
    "RemoteFile",
    "__version__",
]


def main() -> None:
    """CLI entry point."""
    import sys

    from loguru import logger
    from rich.console import Console

    from .cli.app import app
    from .settings import settings

    # Configure logging
    logger.remove()
    if settings.log_format == "json":
        logger.add(sys.stderr, format="{message}", serialize=True, level=settings.log_level)
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan> - <level>{message}</level>"
            ),
            level=settings.log_level,
            colorize=True,
        )

    console = Console()

    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error occurred")
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
