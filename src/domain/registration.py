"""
Registration domain service - Orchestrates the user registration use case.

Registration Flow (sequential, first failure wins)
==================================================

1. Validate input      -> "Missing required fields" / "Invalid email format" /
                          "Password must be at least 6 characters long"
2. Duplicate check     -> "User with this email already exists"
3. Hash password       (injected PasswordHasher)
4. Persist user        -> repository errors surface verbatim
5. Send welcome email  -> email errors surface verbatim

The service never raises: every failure becomes a failed RegistrationResult.

Note: steps 4 and 5 are not atomic. If the welcome email fails, the user
record created in step 4 stays in the store and the registration is still
reported as failed. Uniqueness under concurrent registrations of the same
email is enforced by the repository, not by the duplicate check.
"""

import logging
from dataclasses import dataclass, field

from .exceptions import RegistrationError, UserAlreadyExists
from .hashing import SuffixPasswordHasher
from .models import CreateUserData, EmailMessage, RegistrationInput, RegistrationResult
from .ports import EmailSender, PasswordHasher, UserRepository
from .validation import validate_registration

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Welcome to Our Service!"


def build_welcome_body(name: str) -> str:
    return (
        f"Hello {name},\n\n"
        "Thank you for registering with our service. "
        "Your account has been created successfully.\n\n"
        "Best regards,\nThe Team"
    )


@dataclass
class UserRegistrationService:
    """
    Domain service for user registration.

    Ports are injected through the constructor; the service is the only
    consumer of both.
    """

    user_repository: UserRepository
    email_sender: EmailSender
    password_hasher: PasswordHasher = field(default_factory=SuffixPasswordHasher)

    def register_user(self, data: RegistrationInput) -> RegistrationResult:
        """
        Register a new user and send the welcome email.

        Args:
            data: Email, display name and plaintext password

        Returns:
            RegistrationResult with the new user id, or the error message
        """
        email = getattr(data, "email", None)
        try:
            user_id = self._register(data)
        except RegistrationError as e:
            logger.warning("Registration failed for %s: %s", email, e)
            return RegistrationResult.failed(str(e))
        except Exception as e:
            logger.exception("Unexpected error registering %s", email)
            return RegistrationResult.failed(f"Registration failed: {e}")

        logger.info("Registered user %s (id=%s)", data.email, user_id)
        return RegistrationResult.ok(user_id)

    def _register(self, data: RegistrationInput) -> int:
        validate_registration(data)

        if self.user_repository.find_by_email(data.email) is not None:
            raise UserAlreadyExists()

        password_hash = self.password_hasher.hash(data.password)

        user = self.user_repository.create_user(
            CreateUserData(email=data.email, name=data.name, password_hash=password_hash)
        )

        receipt = self.email_sender.send_email(
            EmailMessage(
                to=data.email,
                subject=WELCOME_SUBJECT,
                body=build_welcome_body(data.name),
            )
        )
        logger.debug("Welcome email for %s sent (message_id=%s)", data.email, receipt.message_id)

        return user.id
