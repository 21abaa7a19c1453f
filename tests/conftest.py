"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory port implementations (no I/O)
- A registration service wired to them
"""

import pytest

from src.adapters.email import InMemoryEmailSender
from src.adapters.repository import InMemoryUserRepository
from src.domain.registration import UserRegistrationService


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def email_sender() -> InMemoryEmailSender:
    return InMemoryEmailSender()


@pytest.fixture
def service(
    user_repository: InMemoryUserRepository, email_sender: InMemoryEmailSender
) -> UserRegistrationService:
    """Registration service wired to in-memory stubs."""
    return UserRegistrationService(user_repository=user_repository, email_sender=email_sender)
