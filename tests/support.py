"""
Test doubles and factories shared across the test suite.
"""

import os
from datetime import datetime, timezone

import pytest

from src.domain.ports import FailureReason, Registrant, VerificationOutcome

requires_postgres = pytest.mark.skipif(
    not os.environ.get("DATABASE_URL"), reason="DATABASE_URL not set"
)

LOW_SCORE = VerificationOutcome(passed=False, score=0.3, reason=FailureReason.LOW_SCORE)
REJECTED = VerificationOutcome(passed=False, reason=FailureReason.UNSUCCESSFUL)


def make_registrant(
    name: str = "Amina Yusuf",
    email: str = "amina@example.com",
    phone: str = "+44 7700 900123",
) -> Registrant:
    """Build a Registrant with a fixed creation timestamp."""
    return Registrant(
        name=name,
        email=email,
        phone=phone,
        created_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


class FakeVerifier:
    """BotVerifier double returning a fixed outcome and recording calls."""

    def __init__(self, outcome: VerificationOutcome | None = None, enabled: bool = True) -> None:
        self.outcome = outcome or VerificationOutcome(passed=True, score=0.9)
        self._enabled = enabled
        self.calls: list[tuple[str | None, str | None]] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    def verify(self, token: str | None, client_address: str | None = None) -> VerificationOutcome:
        self.calls.append((token, client_address))
        return self.outcome


class RecordingNotifier:
    """Notifier double recording who was notified, optionally failing."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.fail_with = fail_with
        self.admin: list[Registrant] = []
        self.welcomed: list[Registrant] = []

    def notify_admin(self, registrant: Registrant) -> bool:
        self.admin.append(registrant)
        if self.fail_with is not None:
            raise self.fail_with
        return True

    def notify_registrant(self, registrant: Registrant) -> bool:
        self.welcomed.append(registrant)
        if self.fail_with is not None:
            raise self.fail_with
        return True
