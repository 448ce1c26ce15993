"""
Console notifier adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging notifications to stdout for development.
"""

import logging

from src.domain.ports import Registrant

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Selected with NOTIFIER_BACKEND=console.
    """

    def __init__(self, admin_email: str | None = None) -> None:
        self._admin_email = admin_email

    def notify_admin(self, registrant: Registrant) -> bool:
        """
        Log the new-registration alert (simulates the admin email).

        Logged at INFO level to be visible in container logs.
        """
        logger.info(
            "[ADMIN] To: %s New registration: %s <%s> %s",
            self._admin_email or "-",
            registrant.name,
            registrant.email,
            registrant.phone,
        )
        return True

    def notify_registrant(self, registrant: Registrant) -> bool:
        """Log the welcome message (simulates the registrant email)."""
        logger.info("[WELCOME] To: %s Hello %s", registrant.email, registrant.name)
        return True
