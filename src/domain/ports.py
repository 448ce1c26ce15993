"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the value types shared across the domain and the
interfaces (ports) the domain requires from infrastructure. Adapters
implement these protocols.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Protocol


@dataclass(frozen=True)
class Registrant:
    """A person who submitted the signup form, unique by email."""

    name: str
    email: str
    phone: str
    created_at: datetime


class FailureReason(str, Enum):
    """Why a verification outcome did not pass."""

    UNSUCCESSFUL = "unsuccessful"
    LOW_SCORE = "low_score"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class VerificationOutcome:
    """
    Result of a single bot-mitigation check.

    Transient: produced once per signup attempt and discarded after the request.
    """

    passed: bool
    score: float | None = None
    reason: FailureReason | None = None
    error_codes: tuple[str, ...] = field(default_factory=tuple)


class RegistrantRepository(Protocol):
    """Port interface for registrant persistence."""

    def find_by_email(self, email: str) -> Registrant | None:
        """
        Look up a registrant by exact email match.

        Args:
            email: Email address as supplied by the client

        Returns:
            The stored Registrant, or None if absent
        """
        ...

    def insert(self, name: str, email: str, phone: str) -> Registrant:
        """
        Create a registrant and assign its creation timestamp.

        The store's own uniqueness guarantee is authoritative: a concurrent
        insert for an email that already exists must be rejected here.

        Returns:
            The stored Registrant

        Raises:
            DuplicateEmail: If a registrant with this email already exists
        """
        ...


class BotVerifier(Protocol):
    """Port interface for bot-mitigation token verification."""

    @property
    def enabled(self) -> bool:
        """True when a verification secret is configured."""
        ...

    def verify(self, token: str | None, client_address: str | None = None) -> VerificationOutcome:
        """
        Verify a client token. Never raises; transport failures are a failed outcome.
        """
        ...


class Notifier(Protocol):
    """Port interface for best-effort signup notifications."""

    def notify_admin(self, registrant: Registrant) -> bool:
        """Send the new-registrant alert. Returns True if handed to the relay."""
        ...

    def notify_registrant(self, registrant: Registrant) -> bool:
        """Send the welcome message. Returns True if handed to the relay."""
        ...
