"""Common CLI utilities."""

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from loguru import logger

from ..core.client import GoogleClientFactory
from ..core.config import DriveShareConfig
from ..core.errors import DriveShareError
from ..core.notifier import GmailNotifier
from ..core.properties import PropertyStore, property_store_from_settings
from ..core.uploader import DriveUploader
from ..settings import Settings, settings
from .formatters import BaseOutputFormatter


def init_store(app_settings: Settings | None = None) -> PropertyStore:
    """Build the property store from settings."""
    return property_store_from_settings(app_settings or settings)


def init_uploader(store: PropertyStore | None = None, app_settings: Settings | None = None) -> DriveUploader:
    """Initialize DriveUploader with standardized configuration.

    Args:
        store: Property store to use (built from settings if None)
        app_settings: Settings to read (global settings if None)

    Returns:
        DriveUploader wired with a Gmail notifier
    """
    app_settings = app_settings or settings
    store = store or init_store(app_settings)
    config = DriveShareConfig.from_settings(app_settings)
    clients = GoogleClientFactory(store, config)
    notifier = GmailNotifier(clients, default_sender=config.notification_sender)
    return DriveUploader(store, notifier, config=config, clients=clients)


@contextmanager
def cli_error_handler(formatter: BaseOutputFormatter) -> Iterator[None]:
    """Turn Drive Share errors into a message and exit code 1."""
    try:
        yield
    except DriveShareError as e:
        logger.debug(f"Command failed: {e!r}")
        formatter.print_error(f"Error: {e}")
        raise typer.Exit(1) from e


def mask_secret(value: str | None, visible: int = 4) -> str | None:
    """Hide all but the last few characters of a secret value."""
    if value is None:
        return None
    if len(value) <= visible:
        return "*" * len(value)
    return f"{'*' * 8}{value[-visible:]}"
