"""
Input validation rules shared by the orchestrator and the email adapters.
"""

import re

from .exceptions import EmailDeliveryError, ValidationError
from .models import EmailMessage, RegistrationInput

# local@domain.tld, no whitespace and a single @
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_registration(data: RegistrationInput) -> None:
    """
    Check a registration request before any port is called.

    Checks run in order: required fields, email format, password length.

    Raises:
        ValidationError: With the message of the first failing rule
    """
    if not data.email or not data.name or not data.password:
        raise ValidationError("Missing required fields")

    if not is_valid_email(data.email):
        raise ValidationError("Invalid email format")

    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


def validate_email_message(message: EmailMessage) -> None:
    """
    Reject messages every email backend would refuse.

    Raises:
        EmailDeliveryError: Missing recipient/subject/body or bad recipient
    """
    if not message.to or not message.subject or not message.body:
        raise EmailDeliveryError("Email service error: Missing required fields")

    if not is_valid_email(message.to):
        raise EmailDeliveryError("Email service error: Invalid email address")
