"""Drive commands: upload, sweep and folder."""

from pathlib import Path
from typing import Annotated

import typer

from ... import __version__
from ...core.properties import ProductProperties
from ...core.types import MimeType
from ..formatters import get_formatter
from ..output import get_output_mode
from ..schemas import FolderOutput, SweepOutput, UploadOutput
from ..utils import cli_error_handler, init_uploader

ProductOption = Annotated[str, typer.Option("--product", "-p", help="Product code selecting the Drive properties")]


def upload(
    file: Annotated[Path, typer.Argument(help="Local file to upload (must have an extension)")],
    to: Annotated[str, typer.Option("--to", "-t", help="Recipient email granted writer access")],
    product: ProductOption,
) -> None:
    """Upload a file to the product's Drive folder, share it and email the link.

    Examples:
        dshare upload report.xlsx --to someone@example.com -p P1
    """
    formatter = get_formatter(get_output_mode())

    with cli_error_handler(formatter):
        uploader = init_uploader()
        formatter.print_progress(f"[bold]Uploading {file.name} for product {product}...[/bold]")
        uploaded = uploader.upload_file(file, to, product)

        formatter.print_result(
            UploadOutput(
                command="upload",
                success=True,
                version=__version__,
                product=product,
                recipient=to,
                file_id=uploaded.id,
                file_name=uploaded.name,
                mime_type=uploaded.mime_type or MimeType.from_filename(file.name).value,
                web_view_link=uploaded.web_view_link,
                folder_ids=uploaded.parents,
            )
        )


def sweep(
    product: ProductOption,
    days: Annotated[
        int | None,
        typer.Option("--days", "-d", help="Retention window in days (defaults to the product's keep.days)"),
    ] = None,
) -> None:
    """Delete files owned by the product account that are older than the retention window.

    Examples:
        dshare sweep -p P1
        dshare sweep -p P1 --days 30
    """
    formatter = get_formatter(get_output_mode())

    with cli_error_handler(formatter):
        uploader = init_uploader()
        retention_days = days if days is not None else ProductProperties(uploader.store, product).keep_days()
        service = uploader.clients.drive(product)
        report = uploader.cleanup_old_files(service, retention_days)

        formatter.print_result(
            SweepOutput(
                command="sweep",
                success=True,
                version=__version__,
                product=product,
                retention_days=retention_days,
                skipped=report.skipped,
                scanned=report.scanned,
                deleted=report.deleted,
                failed=report.failed,
                warning=report.warning,
            )
        )


def folder(
    product: ProductOption,
    name: Annotated[
        str | None,
        typer.Argument(help="Folder name (defaults to the product's folder.name)"),
    ] = None,
) -> None:
    """Find the product's upload folder, creating it if it does not exist.

    Examples:
        dshare folder -p P1
        dshare folder Reports -p P1
    """
    formatter = get_formatter(get_output_mode())

    with cli_error_handler(formatter):
        uploader = init_uploader()
        folder_name = name or ProductProperties(uploader.store, product).folder_name()
        service = uploader.clients.drive(product)
        folder_ids = uploader.create_folder_if_not_exists(service, folder_name)

        formatter.print_result(
            FolderOutput(
                command="folder",
                success=True,
                version=__version__,
                product=product,
                folder_name=folder_name,
                folder_id=folder_ids[0],
            )
        )
