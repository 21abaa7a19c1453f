"""
HTTP email sender adapter (backend B) - Implements EmailSender protocol.

Backend B never fails on its own and answers immediately, but uses a
different contract than backend A:
    POST /sendMessage  {"recipient", "title", "content"}
    -> {"sent": true, "id": "..."} | {"sent": false, "message": "..."}

The adapter maps to -> recipient, subject -> title, body -> content and
id -> message_id.
"""

import logging

import httpx

from src.domain.exceptions import EmailDeliveryError
from src.domain.models import EmailMessage, SendEmailResult
from src.domain.validation import validate_email_message

from .http import JsonHttpEmailSender

logger = logging.getLogger(__name__)


class ReliableHttpEmailSender(JsonHttpEmailSender):
    """Implements EmailSender protocol against backend B."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3003,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(f"http://{host}:{port}", timeout=timeout, client=client)

    def send_email(self, message: EmailMessage) -> SendEmailResult:
        validate_email_message(message)

        data = self._post(
            "/sendMessage",
            {"recipient": message.to, "title": message.subject, "content": message.body},
        )

        if not data.get("sent"):
            error = data.get("message") or "Failed to send message"
            raise EmailDeliveryError(f"Email service error: {error}")

        message_id = data.get("id")
        if not message_id:
            raise EmailDeliveryError("Email service error: Response missing message id")

        logger.info("Email sent to %s (message_id=%s)", message.to, message_id)
        return SendEmailResult(message_id=message_id)
