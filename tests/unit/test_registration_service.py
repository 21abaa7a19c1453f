"""
Unit tests for UserRegistrationService domain logic.

Tests the orchestrator against in-memory stubs and mocked ports to verify:
- Input validation and its messages
- Duplicate detection
- Password hashing
- Persistence and welcome email
- Error capture (the service never raises)
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock, call

import pytest

from src.adapters.email import InMemoryEmailSender
from src.adapters.repository import InMemoryUserRepository
from src.domain.exceptions import EmailDeliveryError, RepositoryError, UserAlreadyExists
from src.domain.hashing import BcryptPasswordHasher
from src.domain.models import RegistrationInput, RegistrationResult, SendEmailResult
from src.domain.registration import WELCOME_SUBJECT, UserRegistrationService

VALID_INPUT = RegistrationInput(email="test@example.com", name="Test User", password="password123")


def mocked_service() -> tuple[UserRegistrationService, Mock, Mock]:
    repo = Mock()
    repo.find_by_email.return_value = None
    repo.create_user.return_value = Mock(id=42)
    sender = Mock()
    sender.send_email.return_value = SendEmailResult(message_id="msg-1")
    return UserRegistrationService(user_repository=repo, email_sender=sender), repo, sender


class TestSuccessfulRegistration:
    """Tests for the happy path."""

    def test_register_returns_success_with_user_id(self, service: UserRegistrationService) -> None:
        """Valid, new user is registered and gets an id."""
        result = service.register_user(VALID_INPUT)

        assert result.success is True
        assert result.user_id is not None
        assert result.error is None

    def test_saves_reference_password_hash(
        self, service: UserRegistrationService, user_repository: InMemoryUserRepository
    ) -> None:
        """Stored credential is the plaintext with the -hashed suffix."""
        service.register_user(VALID_INPUT)

        saved = user_repository.find_by_email(VALID_INPUT.email)
        assert saved is not None
        assert saved.password_hash == "password123-hashed"

    def test_saves_user_data(
        self, service: UserRegistrationService, user_repository: InMemoryUserRepository
    ) -> None:
        """Stored user carries the submitted email and name."""
        result = service.register_user(
            RegistrationInput(email="john@example.com", name="John Doe", password="securepass123")
        )

        saved = user_repository.find_by_email("john@example.com")
        assert saved is not None
        assert saved.id == result.user_id
        assert saved.name == "John Doe"

    def test_sends_welcome_email(
        self, service: UserRegistrationService, email_sender: InMemoryEmailSender
    ) -> None:
        """Welcome email goes to the new user and names them."""
        service.register_user(VALID_INPUT)

        sent = email_sender.last_sent_email
        assert sent is not None
        assert sent.message.to == "test@example.com"
        assert sent.message.subject == "Welcome to Our Service!"
        assert "Test User" in sent.message.body

    def test_sends_exactly_one_email(
        self, service: UserRegistrationService, email_sender: InMemoryEmailSender
    ) -> None:
        service.register_user(VALID_INPUT)
        assert len(email_sender.sent_emails) == 1

    def test_password_of_exactly_six_characters_accepted(
        self, service: UserRegistrationService
    ) -> None:
        """Minimum password length is inclusive."""
        result = service.register_user(
            RegistrationInput(email="test@example.com", name="Test User", password="123456")
        )

        assert result.success is True
        assert result.user_id is not None

    def test_ports_called_in_order(self) -> None:
        """Lookup, then insert, then email."""
        service, repo, sender = mocked_service()
        manager = Mock()
        manager.attach_mock(repo, "repo")
        manager.attach_mock(sender, "sender")

        result = service.register_user(VALID_INPUT)

        assert result == RegistrationResult.ok(42)
        called = [c[0] for c in manager.mock_calls]
        assert called == ["repo.find_by_email", "repo.create_user", "sender.send_email"]
        assert manager.mock_calls[0] == call.repo.find_by_email("test@example.com")

    def test_custom_password_hasher_is_used(self, user_repository: InMemoryUserRepository) -> None:
        """An injected hasher replaces the reference transform."""
        service = UserRegistrationService(
            user_repository=user_repository,
            email_sender=InMemoryEmailSender(),
            password_hasher=BcryptPasswordHasher(rounds=4),
        )

        service.register_user(VALID_INPUT)

        saved = user_repository.find_by_email(VALID_INPUT.email)
        assert saved is not None
        assert saved.password_hash.startswith("$2")
        assert BcryptPasswordHasher().verify("password123", saved.password_hash)


class TestValidation:
    """Tests for input validation messages."""

    @pytest.mark.parametrize(
        "data",
        [
            RegistrationInput(email="", name="Test User", password="password123"),
            RegistrationInput(email="test@example.com", name="", password="password123"),
            RegistrationInput(email="test@example.com", name="Test User", password=""),
        ],
        ids=["email", "name", "password"],
    )
    def test_missing_field_rejected(
        self, service: UserRegistrationService, data: RegistrationInput
    ) -> None:
        """Any empty required field fails with 'Missing required fields'."""
        result = service.register_user(data)

        assert result.success is False
        assert result.user_id is None
        assert "Missing required fields" in result.error

    @pytest.mark.parametrize(
        "email",
        [
            "not-an-email",
            "invalid-email",
            "user@domain",
            "user @example.com",
            "a@b@c.com",
            "test@example.com\n",
            "\ntest@example.com",
        ],
    )
    def test_invalid_email_rejected(self, service: UserRegistrationService, email: str) -> None:
        """Malformed email fails with 'Invalid email format'."""
        result = service.register_user(
            RegistrationInput(email=email, name="Test User", password="password123")
        )

        assert result.success is False
        assert "Invalid email format" in result.error

    def test_trailing_newline_email_not_stored_as_second_record(
        self, service: UserRegistrationService, user_repository: InMemoryUserRepository
    ) -> None:
        """A newline-suffixed address cannot sneak past the exact-match duplicate check."""
        service.register_user(VALID_INPUT)

        result = service.register_user(
            RegistrationInput(email="test@example.com\n", name="Test User", password="password123")
        )

        assert result.success is False
        assert len(user_repository.get_all_users()) == 1

    def test_short_password_rejected(self, service: UserRegistrationService) -> None:
        """Five-character password fails."""
        result = service.register_user(
            RegistrationInput(email="test@example.com", name="Test User", password="12345")
        )

        assert result.success is False
        assert result.error == "Password must be at least 6 characters long"

    def test_missing_fields_reported_before_format(self, service: UserRegistrationService) -> None:
        """Completely invalid input reports the first rule that fails."""
        result = service.register_user(
            RegistrationInput(email="not-an-email", name="", password="1")
        )

        assert result.success is False
        assert "Missing required fields" in result.error

    def test_validation_failure_touches_no_port(self) -> None:
        """Invalid input never reaches the repository or email sender."""
        service, repo, sender = mocked_service()

        service.register_user(RegistrationInput(email="bad", name="X", password="password123"))

        repo.find_by_email.assert_not_called()
        repo.create_user.assert_not_called()
        sender.send_email.assert_not_called()


class TestDuplicateRegistration:
    """Tests for duplicate email handling."""

    def test_second_registration_fails(self, service: UserRegistrationService) -> None:
        """Registering the same email twice fails the second time."""
        first = service.register_user(VALID_INPUT)
        second = service.register_user(VALID_INPUT)

        assert first.success is True
        assert second.success is False
        assert "already exists" in second.error

    def test_duplicate_creates_no_record(
        self, service: UserRegistrationService, user_repository: InMemoryUserRepository
    ) -> None:
        """Store holds one record after a duplicate attempt."""
        service.register_user(VALID_INPUT)
        service.register_user(VALID_INPUT)

        assert len(user_repository.get_all_users()) == 1

    def test_duplicate_sends_no_email(
        self, service: UserRegistrationService, email_sender: InMemoryEmailSender
    ) -> None:
        """Only the first registration sends a welcome email."""
        service.register_user(VALID_INPUT)
        service.register_user(VALID_INPUT)

        assert len(email_sender.sent_emails) == 1

    def test_reregister_after_delete_gets_new_id(
        self, service: UserRegistrationService, user_repository: InMemoryUserRepository
    ) -> None:
        """Deleting a user frees the email for a new registration."""
        first = service.register_user(VALID_INPUT)
        user_repository.delete_user(VALID_INPUT.email)

        second = service.register_user(VALID_INPUT)

        assert second.success is True
        assert second.user_id != first.user_id

    def test_store_duplicate_after_precheck_is_reported(self) -> None:
        """A duplicate raised by the store after the lookup becomes a failed result."""
        service, repo, sender = mocked_service()
        repo.create_user.side_effect = UserAlreadyExists()

        result = service.register_user(VALID_INPUT)

        assert result == RegistrationResult.failed("User with this email already exists")
        sender.send_email.assert_not_called()

    def test_concurrent_duplicate_registrations_exactly_one_succeeds(self) -> None:
        """Concurrent registrations of one email: one success, the rest fail."""
        repository = InMemoryUserRepository()
        service = UserRegistrationService(
            user_repository=repository, email_sender=InMemoryEmailSender()
        )
        results: list[RegistrationResult] = []
        results_lock = threading.Lock()
        num_workers = 6

        def register() -> None:
            result = service.register_user(VALID_INPUT)
            with results_lock:
                results.append(result)

        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            futures = [executor.submit(register) for _ in range(num_workers)]
            for f in futures:
                f.result()

        assert sum(r.success for r in results) == 1
        assert all("already exists" in r.error for r in results if not r.success)
        assert len(repository.get_all_users()) == 1


class TestErrorHandling:
    """Tests that port failures become failed results."""

    def test_repository_lookup_error_captured(self) -> None:
        service, repo, _ = mocked_service()
        repo.find_by_email.side_effect = RepositoryError("Database error: connection refused")

        result = service.register_user(VALID_INPUT)

        assert result.success is False
        assert result.error == "Database error: connection refused"

    def test_repository_insert_error_captured(self) -> None:
        service, repo, sender = mocked_service()
        repo.create_user.side_effect = RepositoryError("Database error: disk full")

        result = service.register_user(VALID_INPUT)

        assert result.success is False
        assert result.error.startswith("Database error:")
        sender.send_email.assert_not_called()

    def test_email_failure_fails_registration(self) -> None:
        """Email failure is surfaced even though the user was stored."""
        service, repo, sender = mocked_service()
        sender.send_email.side_effect = EmailDeliveryError(
            "Email service error: SMTP server temporarily unavailable"
        )

        result = service.register_user(VALID_INPUT)

        assert result.success is False
        assert result.user_id is None
        assert "SMTP server temporarily unavailable" in result.error
        repo.create_user.assert_called_once()

    def test_email_failure_leaves_user_persisted(self, user_repository: InMemoryUserRepository) -> None:
        """Persist-then-notify is not atomic: the record survives."""
        sender = Mock()
        sender.send_email.side_effect = EmailDeliveryError("Email service error: down")
        service = UserRegistrationService(user_repository=user_repository, email_sender=sender)

        result = service.register_user(VALID_INPUT)

        assert result.success is False
        assert user_repository.find_by_email(VALID_INPUT.email) is not None

    def test_unexpected_exception_captured(self) -> None:
        """Untranslated adapter errors still come back as a failed result."""
        service, repo, _ = mocked_service()
        repo.find_by_email.side_effect = RuntimeError("boom")

        result = service.register_user(VALID_INPUT)

        assert result.success is False
        assert "boom" in result.error

    def test_non_input_object_returns_failed_result(self, service: UserRegistrationService) -> None:
        """Garbage input is reported, not raised."""
        result = service.register_user(None)

        assert result.success is False
        assert result.error.startswith("Registration failed:")

    def test_failure_logged_as_warning(self, service: UserRegistrationService, caplog) -> None:
        with caplog.at_level("WARNING", logger="src.domain.registration"):
            service.register_user(RegistrationInput(email="", name="", password=""))

        assert "Registration failed" in caplog.text


def test_welcome_subject_constant() -> None:
    assert WELCOME_SUBJECT == "Welcome to Our Service!"
