"""
HTTP email sender adapter (backend A) - Implements EmailSender protocol.

Backend A wire contract:
    POST /send  {"to", "subject", "body"}
    -> 200 {"success": true, "messageId": "..."}
    -> 500 {"success": false, "error": "..."}

The backend fails about 30% of requests ("SMTP server temporarily
unavailable") and holds successful requests for ~3 seconds, so the client
timeout must stay well above that. Failures are reported, never retried.
"""

import logging
import uuid
from typing import Any

import httpx

from src.domain.exceptions import EmailDeliveryError
from src.domain.models import EmailMessage, SendEmailResult
from src.domain.validation import validate_email_message

logger = logging.getLogger(__name__)


class JsonHttpEmailSender:
    """
    Shared plumbing for email backends that speak JSON over HTTP.

    Args:
        base_url: Backend root, e.g. http://localhost:3002
        timeout: Seconds before a request is abandoned
        client: Pre-built httpx.Client (tests inject one with a MockTransport);
            when given, the caller keeps ownership and close() leaves it open
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def _post(self, path: str, payload: dict[str, str]) -> dict[str, Any]:
        try:
            response = self._client.post(path, json=payload)
            data = response.json()
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Email service error: {e}") from e
        except ValueError as e:
            raise EmailDeliveryError(
                f"Email service error: Invalid response (HTTP {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise EmailDeliveryError(
                f"Email service error: Invalid response (HTTP {response.status_code})"
            )
        return data

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class HttpEmailSender(JsonHttpEmailSender):
    """
    Implements EmailSender protocol against backend A.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3002,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(f"http://{host}:{port}", timeout=timeout, client=client)

    def send_email(self, message: EmailMessage) -> SendEmailResult:
        """
        Send a message through backend A.

        Args:
            message: Recipient, subject and body

        Returns:
            SendEmailResult carrying the backend's messageId

        Raises:
            EmailDeliveryError: Invalid message, backend failure or network error
        """
        validate_email_message(message)

        data = self._post(
            "/send",
            {"to": message.to, "subject": message.subject, "body": message.body},
        )

        if not data.get("success"):
            error = data.get("error") or "Failed to send email"
            raise EmailDeliveryError(f"Email service error: {error}")

        # client-side id when the backend omits one
        message_id = data.get("messageId") or f"client-{uuid.uuid4().hex}"
        logger.info("Email sent to %s (message_id=%s)", message.to, message_id)
        return SendEmailResult(message_id=message_id)
