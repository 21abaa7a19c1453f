"""
In-memory email sender - Implements EmailSender protocol without I/O.

Applies the same validation as the HTTP backends and records every
accepted message so tests can inspect what would have been sent.
"""

import logging
import threading
import time
from dataclasses import dataclass

from src.domain.models import EmailMessage, SendEmailResult
from src.domain.validation import validate_email_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentEmail:
    message: EmailMessage
    message_id: str


class InMemoryEmailSender:
    """
    Implements EmailSender protocol by appending to a list.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._sent: list[SentEmail] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def send_email(self, message: EmailMessage) -> SendEmailResult:
        validate_email_message(message)

        with self._lock:
            message_id = f"stub-msg-{self._next_id}-{int(time.time() * 1000)}"
            self._next_id += 1
            self._sent.append(SentEmail(message=message, message_id=message_id))

        logger.debug("Recorded email to %s (message_id=%s)", message.to, message_id)
        return SendEmailResult(message_id=message_id)

    @property
    def sent_emails(self) -> list[SentEmail]:
        with self._lock:
            return list(self._sent)

    @property
    def last_sent_email(self) -> SentEmail | None:
        with self._lock:
            return self._sent[-1] if self._sent else None

    def close(self) -> None:
        pass

    def clear(self) -> None:
        with self._lock:
            self._sent.clear()
            self._next_id = 1
