"""
Domain models - Plain value types exchanged across the ports.

No framework imports: these dataclasses are what the repository returns,
what the email sender consumes, and what the orchestrator hands back.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RegistrationInput:
    """Registration request as submitted by the caller (plaintext password)."""

    email: str
    name: str
    password: str


@dataclass(frozen=True)
class CreateUserData:
    """Fields the orchestrator hands to the repository for a new user."""

    email: str
    name: str
    password_hash: str


@dataclass(frozen=True)
class User:
    """Stored user record. ``id`` and both timestamps are assigned by the store."""

    id: int
    email: str
    name: str
    password_hash: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RegistrationResult:
    """
    Outcome of a registration attempt.

    Exactly one of ``user_id`` (on success) or ``error`` (on failure)
    is populated. Use the ``ok``/``failed`` constructors.
    """

    success: bool
    user_id: int | None = None
    error: str | None = None

    @classmethod
    def ok(cls, user_id: int) -> "RegistrationResult":
        return cls(success=True, user_id=user_id)

    @classmethod
    def failed(cls, error: str) -> "RegistrationResult":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str


@dataclass(frozen=True)
class SendEmailResult:
    """Delivery receipt. ``message_id`` is opaque to the domain."""

    message_id: str
