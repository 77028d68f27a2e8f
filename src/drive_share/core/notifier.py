"""Share notification emails."""

import base64
from abc import ABC, abstractmethod
from email.mime.text import MIMEText

import jinja2
from googleapiclient.errors import HttpError
from loguru import logger

from .client import GoogleClientFactory
from .errors import ConfigurationError, NotificationError
from .properties import ProductProperties
from .types import ShareNotification

_environment = jinja2.Environment(autoescape=True, undefined=jinja2.ChainableUndefined)


def render_template(notification: ShareNotification) -> str:
    """Render the product's HTML template with the notification variables."""
    try:
        return _environment.from_string(notification.template).render(**notification.variables)
    except jinja2.TemplateError as e:
        raise NotificationError(f"Could not render share email template: {e}") from e


def build_message(notification: ShareNotification, sender: str | None = None) -> MIMEText:
    """Build the text/html message for a notification."""
    message = MIMEText(render_template(notification), "html", "utf-8")
    message["To"] = notification.recipient
    message["Subject"] = notification.subject
    if sender:
        message["From"] = sender
    return message


class Notifier(ABC):
    """Sends share notifications on behalf of a product."""

    @abstractmethod
    def send(self, notification: ShareNotification, product: str) -> None:
        """Render and dispatch the notification.

        Raises:
            NotificationError: If the email could not be rendered or sent
        """


class GmailNotifier(Notifier):
    """Send notifications through the Gmail API as the product's sender."""

    def __init__(self, clients: GoogleClientFactory, default_sender: str | None = None):
        self.clients = clients
        self.default_sender = default_sender

    def sender_for(self, product: str) -> str:
        sender = ProductProperties(self.clients.store, product).email_sender() or self.default_sender
        if not sender:
            raise ConfigurationError(f"No email sender configured for product {product}")
        return sender

    def send(self, notification: ShareNotification, product: str) -> None:
        sender = self.sender_for(product)
        message = build_message(notification, sender)
        raw = base64.urlsafe_b64encode(message.as_bytes()).decode("ascii")

        gmail = self.clients.gmail(product, sender)
        try:
            gmail.users().messages().send(userId="me", body={"raw": raw}).execute()
        except (HttpError, OSError) as e:
            raise NotificationError(f"Could not send share email to {notification.recipient}: {e}") from e
        logger.info(f"Sent share email to {notification.recipient}")
