"""
Domain layer - Pure business logic with zero framework imports.

This package contains the user registration use case and the port
interfaces it depends on. Adapters live in src.adapters and are injected
by the caller, keeping the domain independent of storage and transport.
"""

from .exceptions import (
    EmailDeliveryError,
    RegistrationError,
    RepositoryError,
    UserAlreadyExists,
    ValidationError,
)
from .hashing import BcryptPasswordHasher, SuffixPasswordHasher
from .models import (
    CreateUserData,
    EmailMessage,
    RegistrationInput,
    RegistrationResult,
    SendEmailResult,
    User,
)
from .ports import EmailSender, PasswordHasher, UserRepository
from .registration import UserRegistrationService

__all__ = [
    "BcryptPasswordHasher",
    "CreateUserData",
    "EmailDeliveryError",
    "EmailMessage",
    "EmailSender",
    "PasswordHasher",
    "RegistrationError",
    "RegistrationInput",
    "RegistrationResult",
    "RepositoryError",
    "SendEmailResult",
    "SuffixPasswordHasher",
    "User",
    "UserAlreadyExists",
    "UserRegistrationService",
    "ValidationError",
]
