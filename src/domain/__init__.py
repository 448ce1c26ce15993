"""
Domain layer - Pure business logic with zero framework imports.

This package contains the signup intake flow. It defines its own port
interfaces for infrastructure abstraction, so the store, verifier and
notifier can be swapped by configuration.
"""

from .exceptions import (
    DuplicateEmail,
    EmailAlreadyRegistered,
    MissingFields,
    SignupError,
    VerificationFailed,
)
from .ports import (
    BotVerifier,
    FailureReason,
    Notifier,
    Registrant,
    RegistrantRepository,
    VerificationOutcome,
)
from .signup import SignupService

__all__ = [
    "BotVerifier",
    "DuplicateEmail",
    "EmailAlreadyRegistered",
    "FailureReason",
    "MissingFields",
    "Notifier",
    "Registrant",
    "RegistrantRepository",
    "SignupError",
    "SignupService",
    "VerificationFailed",
    "VerificationOutcome",
]
