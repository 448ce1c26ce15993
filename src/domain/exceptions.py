"""
Domain exceptions - Semantic error types for signup intake.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from .ports import VerificationOutcome


class SignupError(Exception):
    """Base class for signup domain errors."""

    pass


class MissingFields(SignupError):
    """One or more of name, email and phone is missing or blank."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(", ".join(fields))
        self.fields = fields


class VerificationFailed(SignupError):
    """Bot-mitigation check rejected the request."""

    def __init__(self, outcome: VerificationOutcome) -> None:
        super().__init__(outcome.reason.value if outcome.reason else "verification failed")
        self.outcome = outcome


class EmailAlreadyRegistered(SignupError):
    """A registrant with this email already exists."""

    pass


class DuplicateEmail(SignupError):
    """Store rejected an insert because the email key already exists."""

    pass
