"""
Unit tests for SignupService domain logic.

Tests domain logic with mocked ports to verify:
- Required field validation
- Verification gating and bypass
- Duplicate detection, including the insert race
- Best-effort notification
"""

import logging
from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import InMemoryRegistrantRepository
from src.domain.exceptions import (
    DuplicateEmail,
    EmailAlreadyRegistered,
    MissingFields,
    VerificationFailed,
)
from src.domain.ports import FailureReason, VerificationOutcome
from src.domain.signup import SignupService
from tests.support import LOW_SCORE, REJECTED, FakeVerifier, RecordingNotifier


def build_service(
    repository=None, verifier=None, notifier=None
) -> tuple[SignupService, InMemoryRegistrantRepository, FakeVerifier, RecordingNotifier]:
    repository = repository if repository is not None else InMemoryRegistrantRepository()
    verifier = verifier or FakeVerifier()
    notifier = notifier or RecordingNotifier()
    service = SignupService(repository=repository, verifier=verifier, notifier=notifier)
    return service, repository, verifier, notifier


class TestValidation:
    """Tests for required field validation."""

    @pytest.mark.parametrize(
        "name,email,phone,missing",
        [
            (None, "a@x.com", "123", ["name"]),
            ("Amina", "", "123", ["email"]),
            ("Amina", "a@x.com", "   ", ["phone"]),
            (None, None, None, ["name", "email", "phone"]),
        ],
    )
    def test_missing_fields_raise(self, name, email, phone, missing) -> None:
        """Missing or blank fields raise MissingFields naming them."""
        service, repository, _, _ = build_service()

        with pytest.raises(MissingFields) as exc_info:
            service.signup(name, email, phone)

        assert exc_info.value.fields == missing
        assert len(repository) == 0

    def test_validation_runs_before_verification(self) -> None:
        """An incomplete form never reaches the verifier."""
        service, _, verifier, _ = build_service()

        with pytest.raises(MissingFields):
            service.signup("Amina", None, "123", token="tok")

        assert verifier.calls == []


class TestVerification:
    """Tests for bot-mitigation gating."""

    def test_verifier_called_with_token_and_address(self) -> None:
        """Enabled verifier receives the token and client address."""
        service, _, verifier, _ = build_service()

        service.signup("Amina", "a@x.com", "123", token="tok", client_address="203.0.113.7")

        assert verifier.calls == [("tok", "203.0.113.7")]

    def test_failed_verification_raises_and_stores_nothing(self) -> None:
        """success=false rejects the signup before anything is written."""
        service, repository, _, notifier = build_service(verifier=FakeVerifier(REJECTED))

        with pytest.raises(VerificationFailed) as exc_info:
            service.signup("Amina", "a@x.com", "123", token="tok")

        assert exc_info.value.outcome.reason == FailureReason.UNSUCCESSFUL
        assert len(repository) == 0
        assert notifier.admin == []

    def test_low_score_raises(self) -> None:
        """A low score rejects the signup."""
        service, repository, _, _ = build_service(verifier=FakeVerifier(LOW_SCORE))

        with pytest.raises(VerificationFailed) as exc_info:
            service.signup("Amina", "a@x.com", "123", token="tok")

        assert exc_info.value.outcome.score == 0.3
        assert len(repository) == 0

    def test_disabled_verifier_is_not_called(self) -> None:
        """Without a secret the verification stage is skipped entirely."""
        verifier = FakeVerifier(VerificationOutcome(passed=False), enabled=False)
        service, repository, _, _ = build_service(verifier=verifier)

        service.signup("Amina", "a@x.com", "123", token="garbage")

        assert verifier.calls == []
        assert repository.find_by_email("a@x.com") is not None


class TestDuplicateDetection:
    """Tests for the uniqueness check."""

    def test_existing_email_raises_already_registered(self) -> None:
        """Pre-check finds the existing registrant."""
        service, repository, _, notifier = build_service()
        repository.insert("First", "a@x.com", "111")

        with pytest.raises(EmailAlreadyRegistered):
            service.signup("Second", "a@x.com", "222")

        assert repository.find_by_email("a@x.com").name == "First"
        assert len(repository) == 1
        assert notifier.welcomed == []

    def test_email_match_is_exact(self) -> None:
        """Emails are compared exactly as supplied."""
        service, repository, _, _ = build_service()
        service.signup("Amina", "a@x.com", "123")

        service.signup("Amina", "A@X.com", "123")

        assert len(repository) == 2

    def test_insert_race_maps_to_already_registered(self) -> None:
        """DuplicateEmail from the store (lost race) surfaces as EmailAlreadyRegistered."""
        repo = Mock()
        repo.find_by_email.return_value = None
        repo.insert.side_effect = DuplicateEmail("a@x.com")
        service, _, _, notifier = build_service(repository=repo)

        with pytest.raises(EmailAlreadyRegistered):
            service.signup("Amina", "a@x.com", "123")

        assert notifier.admin == []

    def test_other_store_errors_propagate(self) -> None:
        """Infrastructure errors are not translated by the domain."""
        repo = Mock()
        repo.find_by_email.side_effect = ConnectionError("database unreachable")
        service, _, _, _ = build_service(repository=repo)

        with pytest.raises(ConnectionError):
            service.signup("Amina", "a@x.com", "123")


class TestSignupFlow:
    """Tests for the successful path and notification."""

    def test_signup_returns_stored_registrant(self) -> None:
        """The stored record has the submitted fields and a creation timestamp."""
        service, repository, _, _ = build_service()

        registrant = service.signup("Amina", "a@x.com", "123")

        assert registrant.name == "Amina"
        assert registrant.created_at is not None
        assert repository.find_by_email("a@x.com") == registrant

    def test_both_notifications_sent(self) -> None:
        """Admin alert and welcome message are sent for the new registrant."""
        service, _, _, notifier = build_service()

        registrant = service.signup("Amina", "a@x.com", "123")

        assert notifier.admin == [registrant]
        assert notifier.welcomed == [registrant]

    def test_notifier_failure_does_not_fail_signup(self, caplog: pytest.LogCaptureFixture) -> None:
        """A raising notifier is logged; the record stays and signup succeeds."""
        notifier = RecordingNotifier(fail_with=RuntimeError("relay down"))
        service, repository, _, _ = build_service(notifier=notifier)

        with caplog.at_level(logging.ERROR):
            registrant = service.signup("Amina", "a@x.com", "123")

        assert repository.find_by_email("a@x.com") == registrant
        # Welcome is still attempted after the admin alert failed
        assert len(notifier.welcomed) == 1
        assert "Admin notification failed" in caplog.text
        assert "Registrant notification failed" in caplog.text

    def test_notifier_returning_false_is_tolerated(self) -> None:
        """A notifier that reports a no-op does not affect the result."""
        notifier = Mock()
        notifier.notify_admin.return_value = False
        notifier.notify_registrant.return_value = False
        service, _, _, _ = build_service(notifier=notifier)

        registrant = service.signup("Amina", "a@x.com", "123")

        notifier.notify_admin.assert_called_once_with(registrant)
        notifier.notify_registrant.assert_called_once_with(registrant)

