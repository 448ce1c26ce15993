"""
Signup domain service - intake flow for the landing page form.

Each request flows through fixed stages with early exits:

    validate -> verify -> duplicate check -> persist -> notify

Validation, verification and duplicate failures raise domain exceptions
before anything is written. Once the registrant is persisted, nothing
downstream can turn the signup into a failure: notifier errors are logged
and swallowed so the caller always sees success.
"""

import logging
from dataclasses import dataclass

from .exceptions import DuplicateEmail, EmailAlreadyRegistered, MissingFields, VerificationFailed
from .ports import BotVerifier, Notifier, Registrant, RegistrantRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone")


@dataclass
class SignupService:
    """
    Domain service for registrant intake.

    Orchestrates the verifier, the registrant store and the notifier.
    """

    repository: RegistrantRepository
    verifier: BotVerifier
    notifier: Notifier

    def signup(
        self,
        name: str | None,
        email: str | None,
        phone: str | None,
        token: str | None = None,
        client_address: str | None = None,
    ) -> Registrant:
        """
        Register a new contact.

        Args:
            name: Display name
            email: Email address, stored and compared exactly as supplied
            phone: Phone contact
            token: Bot-mitigation token from the landing page
            client_address: Remote address of the HTTP client, if known

        Returns:
            The stored Registrant

        Raises:
            MissingFields: If name, email or phone is missing or blank
            VerificationFailed: If the bot-mitigation check fails
            EmailAlreadyRegistered: If the email is already registered
        """
        self._validate(name=name, email=email, phone=phone)

        if self.verifier.enabled:
            outcome = self.verifier.verify(token, client_address)
            if not outcome.passed:
                logger.info(
                    "Signup rejected by verifier: reason=%s score=%s",
                    outcome.reason.value if outcome.reason else None,
                    outcome.score,
                )
                raise VerificationFailed(outcome)

        if self.repository.find_by_email(email) is not None:
            raise EmailAlreadyRegistered(email)

        try:
            registrant = self.repository.insert(name, email, phone)
        except DuplicateEmail:
            # Lost the race with a concurrent signup between lookup and insert
            raise EmailAlreadyRegistered(email) from None

        logger.info("Registrant created: %s", registrant.email)
        self._notify(registrant)
        return registrant

    def _validate(self, **fields: str | None) -> None:
        missing = [key for key in REQUIRED_FIELDS if not fields.get(key) or not fields[key].strip()]
        if missing:
            raise MissingFields(missing)

    def _notify(self, registrant: Registrant) -> None:
        """Send both notifications; failures only reach the log."""
        notifications = (
            ("admin", self.notifier.notify_admin),
            ("registrant", self.notifier.notify_registrant),
        )
        for kind, send in notifications:
            try:
                send(registrant)
            except Exception:
                logger.exception("%s notification failed for %s", kind.capitalize(), registrant.email)
