"""Authenticated Google API clients built from product credentials."""

import json
from typing import Any

import google.auth.exceptions
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiClientError
from loguru import logger

from .config import DriveShareConfig
from .errors import AuthenticationError
from .properties import ProductProperties, PropertyStore


class GoogleClientFactory:
    """Build Drive and Gmail services for a product's service account."""

    def __init__(self, store: PropertyStore, config: DriveShareConfig | None = None):
        self.store = store
        self.config = config or DriveShareConfig()

    def credentials(
        self, product: str, scopes: list[str], subject: str | None = None
    ) -> service_account.Credentials:
        """Parse the product's credentials blob into scoped credentials.

        Args:
            product: Product code whose secret property is used
            scopes: OAuth scopes to request
            subject: Account to impersonate through domain-wide delegation

        Raises:
            ConfigurationError: If the secret property is missing
            AuthenticationError: If the blob is not a usable service account key
        """
        blob = ProductProperties(self.store, product).credentials_json()
        try:
            info: dict[str, Any] = json.loads(blob)
            creds = service_account.Credentials.from_service_account_info(info, scopes=scopes)
        except (ValueError, KeyError, TypeError, google.auth.exceptions.GoogleAuthError) as e:
            raise AuthenticationError(f"Invalid Google credentials for product {product}: {e}") from e

        if subject:
            creds = creds.with_subject(subject)
        return creds

    def _build(self, api: str, version: str, creds: service_account.Credentials, product: str):
        try:
            return build(api, version, credentials=creds, cache_discovery=False)
        except (GoogleApiClientError, google.auth.exceptions.GoogleAuthError, OSError) as e:
            raise AuthenticationError(f"Could not create {api} client for product {product}: {e}") from e

    def drive(self, product: str):
        """Get a Drive v3 service for the product."""
        creds = self.credentials(product, self.config.drive_scopes)
        logger.debug(f"Building Drive service for product {product}")
        return self._build("drive", "v3", creds, product)

    def gmail(self, product: str, sender: str):
        """Get a Gmail v1 service sending as ``sender``."""
        creds = self.credentials(product, self.config.gmail_scopes, subject=sender)
        logger.debug(f"Building Gmail service for product {product} as {sender}")
        return self._build("gmail", "v1", creds, product)
