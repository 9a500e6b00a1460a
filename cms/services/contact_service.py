"""
Contact intake: persist the inquiry, then send a best-effort notification.

The stored message is authoritative. The notification runs after the commit
and its outcome is only logged; it never changes what the caller sees.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

from cms.core.mailer import send_email
from cms.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
PLACEHOLDER = "N/A"
MESSAGES = "messages"

Notifier = Callable[..., bool]

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def _or_placeholder(value: Any) -> Any:
    if value is None or value == "":
        return PLACEHOLDER
    return value


class ContactService:
    """Stores contact submissions in `messages` and notifies the site owner."""

    def __init__(
        self,
        resources: ResourceService,
        *,
        recipient: str = "",
        notifier: Notifier = send_email,
    ) -> None:
        self.resources = resources
        self.recipient = recipient
        self.notifier = notifier

    def build_fields(self, payload: Mapping[str, Any]) -> dict:
        return {
            "name": payload.get("name"),
            "phone": _or_placeholder(payload.get("phone")),
            "email": payload.get("email"),
            "company": _or_placeholder(payload.get("company")),
            "message": payload.get("message"),
        }

    def submit(self, payload: Mapping[str, Any]) -> dict:
        """Append the inquiry to `messages`. Store errors propagate to the caller."""
        record = self.resources.create(MESSAGES, self.build_fields(payload))
        logger.info("Contact message %s stored", record["id"])
        return record

    def render(self, record: Mapping[str, Any]) -> tuple[str, str]:
        subject = f"New Lead: {record.get('name')} from {record.get('company') or PLACEHOLDER}"
        html_body = _env.get_template("contact_notification.html").render(message=record)
        return subject, html_body

    def notify(self, record: Mapping[str, Any]) -> bool:
        """Send the notification for a stored message. Never raises."""
        try:
            subject, html_body = self.render(record)
            sent = bool(self.notifier(subject, self.recipient, html_body))
        except Exception:
            logger.exception("Notification for contact message %s failed", record.get("id"))
            return False
        if sent:
            logger.info("Notification sent for contact message %s", record.get("id"))
        else:
            logger.warning("Notification not sent for contact message %s", record.get("id"))
        return sent
