"""Per-product property storage backends."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from loguru import logger

from .errors import ConfigurationError

if TYPE_CHECKING:
    from ..settings import Settings

SECRET_JSON_KEY = "service.google.drive.secret.JSON"
KEEP_DAYS_KEY = "service.google.drive.keep.days"
FOLDER_NAME_KEY = "service.google.drive.folder.name"
EMAIL_TEMPLATE_KEY = "service.google.drive.email.template"
EMAIL_SENDER_KEY = "service.google.drive.email.sender"

KNOWN_KEYS = (SECRET_JSON_KEY, KEEP_DAYS_KEY, FOLDER_NAME_KEY, EMAIL_TEMPLATE_KEY, EMAIL_SENDER_KEY)
SECRET_KEYS = frozenset({SECRET_JSON_KEY})


class PropertyStore(ABC):
    """Abstract base class for product property backends."""

    @abstractmethod
    def get(self, product: str, key: str) -> str | None:
        """Return the property value, or None when it is not set."""

    @abstractmethod
    def set(self, product: str, key: str, value: str) -> bool:
        """Store a property value. Returns True on success."""

    @abstractmethod
    def delete(self, product: str, key: str) -> bool:
        """Remove a property. Returns True if something was removed."""

    @abstractmethod
    def list_keys(self, product: str) -> list[str]:
        """List the property keys set for a product."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this backend can be used."""


class FilePropertyStore(PropertyStore):
    """YAML file mapping each product to its properties."""

    def __init__(self, path: Path):
        self.path = path

    def _load(self) -> dict[str, dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read property file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Property file {self.path} must contain a mapping of products")
        return data

    def _save(self, data: dict[str, dict[str, Any]]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True, allow_unicode=True)
            return True
        except OSError as e:
            logger.error(f"Failed to save property file: {e}")
            return False

    def _properties(self, data: dict[str, Any], product: str) -> dict[str, Any]:
        properties = data.get(product) or {}
        if not isinstance(properties, dict):
            raise ConfigurationError(f"Properties for product {product} in {self.path} must be a mapping")
        return properties

    def get(self, product: str, key: str) -> str | None:
        value = self._properties(self._load(), product).get(key)
        return None if value is None else str(value)

    def set(self, product: str, key: str, value: str) -> bool:
        data = self._load()
        self._properties(data, product)
        data.setdefault(product, {})[key] = value
        return self._save(data)

    def delete(self, product: str, key: str) -> bool:
        data = self._load()
        properties = self._properties(data, product)
        if key not in properties:
            return False
        del properties[key]
        if not properties:
            data.pop(product, None)
        return self._save(data)

    def list_keys(self, product: str) -> list[str]:
        return sorted(self._properties(self._load(), product).keys())

    def is_available(self) -> bool:
        """File storage is always available."""
        return True


class KeyringPropertyStore(PropertyStore):
    """Keyring-based storage, suited to the credentials blob."""

    DEFAULT_SERVICE_NAME = "drive-share"
    KEY_INDEX = "_keys"

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME):
        self.service_name = service_name
        self._keyring = None

    @property
    def keyring(self):
        """Lazy import keyring module."""
        if self._keyring is None:
            import keyring

            self._keyring = keyring
        return self._keyring

    @staticmethod
    def _entry(product: str, key: str) -> str:
        return f"{product}/{key}"

    def get(self, product: str, key: str) -> str | None:
        try:
            return self.keyring.get_password(self.service_name, self._entry(product, key))
        except self.keyring.errors.NoKeyringError:
            logger.debug(f"No keyring backend, treating '{key}' as unset")
            return None
        except Exception as e:
            raise ConfigurationError(f"Cannot read '{key}' for product {product} from keyring: {e}") from e

    def set(self, product: str, key: str, value: str) -> bool:
        try:
            self.keyring.set_password(self.service_name, self._entry(product, key), value)
        except Exception as e:
            logger.error(f"Failed to save to keyring: {e}")
            return False
        self._update_index(product, add=key)
        return True

    def delete(self, product: str, key: str) -> bool:
        try:
            self.keyring.delete_password(self.service_name, self._entry(product, key))
        except Exception as e:
            logger.debug(f"Failed to delete from keyring: {e}")
            return False
        self._update_index(product, remove=key)
        return True

    def list_keys(self, product: str) -> list[str]:
        try:
            data = self.keyring.get_password(self.service_name, self._entry(product, self.KEY_INDEX))
            if not data:
                return []
            result = json.loads(data)
            return sorted(result) if isinstance(result, list) else []
        except Exception:
            return []

    def is_available(self) -> bool:
        """Check if a usable keyring backend is configured.

        With no backend installed keyring falls back to a placeholder that
        fails every call and has priority 0.
        """
        try:
            backend = self.keyring.get_keyring()
            return backend.priority > 0
        except Exception:
            return False

    def _update_index(self, product: str, add: str | None = None, remove: str | None = None) -> None:
        keys = set(self.list_keys(product))
        if add:
            keys.add(add)
        if remove:
            keys.discard(remove)
        try:
            self.keyring.set_password(
                self.service_name, self._entry(product, self.KEY_INDEX), json.dumps(sorted(keys))
            )
        except Exception as e:
            logger.debug(f"Failed to update key index: {e}")


class ChainedPropertyStore(PropertyStore):
    """Reads from each store in turn; writes go to the first one."""

    def __init__(self, stores: list[PropertyStore]):
        if not stores:
            raise ValueError("ChainedPropertyStore needs at least one store")
        self.stores = stores

    def get(self, product: str, key: str) -> str | None:
        for store in self.stores:
            value = store.get(product, key)
            if value is not None and value.strip():
                return value
        return None

    def set(self, product: str, key: str, value: str) -> bool:
        return self.stores[0].set(product, key, value)

    def delete(self, product: str, key: str) -> bool:
        removed = False
        for store in self.stores:
            removed = store.delete(product, key) or removed
        return removed

    def list_keys(self, product: str) -> list[str]:
        keys: set[str] = set()
        for store in self.stores:
            keys.update(store.list_keys(product))
        return sorted(keys)

    def is_available(self) -> bool:
        return any(store.is_available() for store in self.stores)


def get_property_store(
    properties_path: Path,
    use_keyring: bool = True,
    service_name: str = KeyringPropertyStore.DEFAULT_SERVICE_NAME,
) -> PropertyStore:
    """Factory function to get the property store for this host.

    Args:
        properties_path: YAML file holding product properties
        use_keyring: Whether to consult the keyring before the file
        service_name: Service name for keyring

    Returns:
        The file store, with the keyring chained in front when usable
    """
    file_store = FilePropertyStore(properties_path)
    if use_keyring:
        try:
            keyring_store = KeyringPropertyStore(service_name)
            if keyring_store.is_available():
                logger.debug("Using keyring in front of file property store")
                return ChainedPropertyStore([keyring_store, file_store])
            logger.debug("Keyring not available")
        except ImportError:
            logger.debug("Keyring module not installed")

    logger.debug(f"Using file property store at {properties_path}")
    return file_store


def property_store_from_settings(settings: Settings) -> PropertyStore:
    """Build the property store described by application settings."""
    return get_property_store(
        settings.properties_path,
        use_keyring=settings.use_keyring,
        service_name=settings.keyring_service_name,
    )


class ProductProperties:
    """Typed access to the Drive properties of one product."""

    def __init__(self, store: PropertyStore, product: str):
        self.store = store
        self.product = product

    def optional(self, key: str) -> str | None:
        """Return the value, treating blank values as unset."""
        value = self.store.get(self.product, key)
        if value is None or not value.strip():
            return None
        return value

    def required(self, key: str, purpose: str) -> str:
        """Return the value or raise ConfigurationError."""
        value = self.optional(key)
        if value is None:
            raise ConfigurationError(f"{purpose}: could not find property '{key}' for product {self.product}")
        return value

    def credentials_json(self) -> str:
        return self.required(SECRET_JSON_KEY, "Could not get Google Drive service")

    def folder_name(self) -> str:
        return self.required(FOLDER_NAME_KEY, "Could not upload file")

    def email_template(self) -> str:
        return self.required(EMAIL_TEMPLATE_KEY, "Could not send file share email")

    def email_sender(self) -> str | None:
        return self.optional(EMAIL_SENDER_KEY)

    def keep_days(self) -> int | None:
        """Retention window in days, or None when not configured."""
        value = self.optional(KEEP_DAYS_KEY)
        if value is None:
            return None
        try:
            return int(value.strip())
        except ValueError as e:
            raise ConfigurationError(
                f"Property '{KEEP_DAYS_KEY}' for product {self.product} is not a whole number: {value!r}"
            ) from e
