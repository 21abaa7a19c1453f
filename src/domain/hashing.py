"""
Password hashers used by the registration service.

SuffixPasswordHasher reproduces the reference transform (append a fixed
marker) so stored credentials are predictable in tests and demos. It is
not a security measure. BcryptPasswordHasher is the one to configure for
anything that stores real passwords.
"""

import bcrypt

HASH_SUFFIX = "-hashed"


class SuffixPasswordHasher:
    """Deterministic placeholder: ``password + "-hashed"``."""

    def hash(self, password: str) -> str:
        return f"{password}{HASH_SUFFIX}"

    def verify(self, password: str, password_hash: str) -> bool:
        return self.hash(password) == password_hash


class BcryptPasswordHasher:
    """
    Salted bcrypt hashing.

    Args:
        rounds: bcrypt work factor (cost), 10 or more in production
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
