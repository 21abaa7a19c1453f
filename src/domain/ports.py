"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the registration service
requires from infrastructure. Adapters implement these protocols through
structural subtyping; none of them inherit from the Protocol classes.
"""

from typing import Protocol

from .models import CreateUserData, EmailMessage, SendEmailResult, User


class UserRepository(Protocol):
    """Port interface for user persistence, keyed by email."""

    def find_by_email(self, email: str) -> User | None:
        """
        Look up a user by exact, case-sensitive email match.

        Returns:
            The stored user, or None when no record matches
        """
        ...

    def create_user(self, data: CreateUserData) -> User:
        """
        Store a new user record.

        The store assigns the id and sets created_at == updated_at.

        Raises:
            UserAlreadyExists: Email is already stored (checked atomically)
            ValidationError: A required field is empty
            RepositoryError: Any other storage failure
        """
        ...

    def get_all_users(self) -> list[User]:
        """Return every user, most recently created first."""
        ...

    def delete_user(self, email: str) -> bool:
        """
        Remove the user with this email.

        Returns:
            True if a record existed and was removed, False otherwise
        """
        ...

    def ping(self) -> None:
        """
        Check the store is reachable.

        Raises:
            RepositoryError: The backing store cannot be reached
        """
        ...

    def close(self) -> None:
        """Release held resources (connections). Call once at shutdown."""
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_email(self, message: EmailMessage) -> SendEmailResult:
        """
        Deliver a message and return its delivery identifier.

        Raises:
            EmailDeliveryError: Empty field, invalid recipient, or backend failure
        """
        ...


class PasswordHasher(Protocol):
    """Port interface for deriving the stored credential from a password."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...
