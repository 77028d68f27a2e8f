"""Product property management command."""

from pathlib import Path
from typing import Annotated

import typer

from ... import __version__
from ...core.errors import ConfigurationError
from ...core.properties import KNOWN_KEYS, SECRET_KEYS
from ..formatters import BaseOutputFormatter, get_formatter
from ..output import get_output_mode
from ..schemas import PropertiesOutput, PropertyValue
from ..utils import cli_error_handler, init_store, mask_secret


def props(
    action: Annotated[str, typer.Argument(help="Action: show, set, delete")],
    product: Annotated[str, typer.Option("--product", "-p", help="Product code")],
    key: Annotated[str | None, typer.Option("--key", "-k", help="Property key")] = None,
    value: Annotated[str | None, typer.Option("--value", help="Property value")] = None,
    value_file: Annotated[
        Path | None,
        typer.Option("--value-file", "-f", help="Read the value from a file (e.g. a service account key)"),
    ] = None,
) -> None:
    """Manage per-product Drive properties.

    Actions:
        show   - List the product's properties (secrets masked)
        set    - Store a property value
        delete - Remove a property

    Examples:
        dshare props show -p P1
        dshare props set -p P1 -k service.google.drive.folder.name --value Reports
        dshare props set -p P1 -k service.google.drive.secret.JSON -f sa.json
        dshare props delete -p P1 -k service.google.drive.keep.days
    """
    formatter = get_formatter(get_output_mode())

    with cli_error_handler(formatter):
        store = init_store()

        if action == "show":
            keys = sorted(set(KNOWN_KEYS) | set(store.list_keys(product)))
            properties = []
            for prop_key in keys:
                prop_value = store.get(product, prop_key)
                secret = prop_key in SECRET_KEYS
                properties.append(
                    PropertyValue(
                        key=prop_key,
                        value=mask_secret(prop_value) if secret else prop_value,
                        secret=secret,
                    )
                )
            _print(formatter, product, action, properties)

        elif action == "set":
            if not key:
                raise ConfigurationError("--key is required for 'set'")
            if value_file is not None:
                try:
                    value = value_file.read_text(encoding="utf-8")
                except OSError as e:
                    raise ConfigurationError(f"Cannot read {value_file}: {e}") from e
            if value is None:
                raise ConfigurationError("Either --value or --value-file is required for 'set'")
            if not store.set(product, key, value):
                raise ConfigurationError(f"Could not store property '{key}' for product {product}")
            _print(formatter, product, action, [PropertyValue(key=key, secret=key in SECRET_KEYS)])

        elif action == "delete":
            if not key:
                raise ConfigurationError("--key is required for 'delete'")
            if not store.delete(product, key):
                formatter.print_warning(f"Property '{key}' was not set for product {product}")
            _print(formatter, product, action, [PropertyValue(key=key, secret=key in SECRET_KEYS)])

        else:
            formatter.print_error(f"Unknown action: {action}")
            formatter.print_progress("[dim]Valid actions: show, set, delete[/dim]")
            raise typer.Exit(1)


def _print(formatter: BaseOutputFormatter, product: str, action: str, properties: list[PropertyValue]) -> None:
    formatter.print_result(
        PropertiesOutput(
            command="props",
            success=True,
            version=__version__,
            product=product,
            action=action,
            properties=properties,
        )
    )
