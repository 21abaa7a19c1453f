"""
In-memory repository adapter - Implements UserRepository protocol.

Keeps users in a process-local dict keyed by email. No I/O, so tests that
use it stay unit tests. A single lock makes check-and-insert atomic, which
is what gives the uniqueness guarantee under concurrent registrations.
"""

import logging
import threading
from datetime import UTC, datetime

from src.domain.exceptions import UserAlreadyExists, ValidationError
from src.domain.models import CreateUserData, User

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with a lock-guarded dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stored User values are frozen dataclasses, so they are returned as is.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._users.get(email)

    def create_user(self, data: CreateUserData) -> User:
        """
        Store a new user, assigning the next id and equal timestamps.

        Raises:
            ValidationError: A required field is empty
            UserAlreadyExists: Email is already stored
        """
        if not data.email or not data.name or not data.password_hash:
            raise ValidationError("Database error: Missing required fields")

        with self._lock:
            if data.email in self._users:
                raise UserAlreadyExists()

            now = datetime.now(UTC)
            user = User(
                id=self._next_id,
                email=data.email,
                name=data.name,
                password_hash=data.password_hash,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self._users[data.email] = user

        logger.debug("User created: %s (id=%s)", user.email, user.id)
        return user

    def get_all_users(self) -> list[User]:
        with self._lock:
            users = list(self._users.values())
        # ids grow with insertion order, so they break timestamp ties
        return sorted(users, key=lambda u: (u.created_at, u.id), reverse=True)

    def delete_user(self, email: str) -> bool:
        with self._lock:
            return self._users.pop(email, None) is not None

    def ping(self) -> None:
        pass

    def close(self) -> None:
        pass

    def clear(self) -> None:
        """Drop all users and restart ids at 1 (test helper)."""
        with self._lock:
            self._users.clear()
            self._next_id = 1
