"""
FastAPI dependencies - Adapter construction and dependency injection.

Adapters are built once per process from Settings (see main.lifespan)
and stored on app.state; the Depends() factories below hand them to
routes and wire them into the registration service.
"""

from fastapi import Depends, Request

from src.adapters.email import HttpEmailSender, InMemoryEmailSender, ReliableHttpEmailSender
from src.adapters.repository import InMemoryUserRepository, PostgresUserRepository
from src.config.settings import Settings
from src.domain.hashing import BcryptPasswordHasher, SuffixPasswordHasher
from src.domain.ports import EmailSender, PasswordHasher, UserRepository
from src.domain.registration import UserRegistrationService


def build_user_repository(settings: Settings) -> InMemoryUserRepository | PostgresUserRepository:
    """Create the configured repository. The caller must close() it."""
    if settings.user_repository_backend == "memory":
        return InMemoryUserRepository()
    return PostgresUserRepository.connect(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )


def build_email_sender(
    settings: Settings,
) -> HttpEmailSender | ReliableHttpEmailSender | InMemoryEmailSender:
    """Create the configured email sender."""
    if settings.email_backend == "memory":
        return InMemoryEmailSender()
    if settings.email_backend == "http":
        return HttpEmailSender(
            host=settings.email_host,
            port=settings.email_port,
            timeout=settings.email_timeout_seconds,
        )
    return ReliableHttpEmailSender(
        host=settings.email_host,
        port=settings.email_reliable_port,
        timeout=settings.email_timeout_seconds,
    )


def build_password_hasher(settings: Settings) -> PasswordHasher:
    if settings.password_hasher == "bcrypt":
        return BcryptPasswordHasher(rounds=settings.bcrypt_cost)
    return SuffixPasswordHasher()


def get_user_repository(request: Request) -> UserRepository:
    """Get the repository created during app lifespan startup."""
    return request.app.state.user_repository


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_registration_service(
    user_repository: UserRepository = Depends(get_user_repository),
    email_sender: EmailSender = Depends(get_email_sender),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserRegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, email sender and password hasher.
    """
    return UserRegistrationService(
        user_repository=user_repository,
        email_sender=email_sender,
        password_hasher=password_hasher,
    )
