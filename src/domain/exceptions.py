"""
Domain exceptions - Semantic error types for user registration.

Every adapter translates its infrastructure failures into one of these,
so the orchestrator can report them without knowing which backend failed.
The exception message is what ends up in a failed RegistrationResult.
"""

DUPLICATE_USER_MESSAGE = "User with this email already exists"


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ValidationError(RegistrationError):
    """Missing field, malformed email or weak password."""

    pass


class UserAlreadyExists(RegistrationError):
    """A user record with this email is already stored."""

    def __init__(self, message: str = DUPLICATE_USER_MESSAGE) -> None:
        super().__init__(message)


class RepositoryError(RegistrationError):
    """Any other persistence failure."""

    pass


class EmailDeliveryError(RegistrationError):
    """The email backend rejected the message or could not be reached."""

    pass
