"""
SMTP notifier adapter - Implements Notifier protocol.

Sends the admin alert and the registrant welcome message through an SMTP
relay (STARTTLS + login). Both sends are best-effort: missing configuration
is a logged no-op and relay errors are logged and reported as False.
"""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from html import escape

from src.domain.ports import Registrant

logger = logging.getLogger(__name__)


class SmtpNotifier:
    """
    Implements Notifier protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    A new relay connection is opened per message.
    """

    def __init__(
        self,
        username: str | None,
        password: str | None,
        admin_email: str | None = None,
        host: str = "smtp.gmail.com",
        port: int = 587,
        timeout: float = 10.0,
        brand_name: str = "Athaan Fi Beit",
    ) -> None:
        self._username = username
        self._password = password
        self._admin_email = admin_email
        self._host = host
        self._port = port
        self._timeout = timeout
        self._brand_name = brand_name

    def notify_admin(self, registrant: Registrant) -> bool:
        if not (self._admin_email and self._username and self._password):
            logger.warning("ADMIN_EMAIL, EMAIL_USER or EMAIL_PASS not configured - skipping admin email.")
            return False

        html = (
            "<h3>New Registration</h3>"
            f"<p><b>Name:</b> {escape(registrant.name)}</p>"
            f"<p><b>Email:</b> {escape(registrant.email)}</p>"
            f"<p><b>Phone:</b> {escape(registrant.phone)}</p>"
            f"<p>Created at: {registrant.created_at.isoformat()}</p>"
        )
        return self._send(
            to=self._admin_email,
            subject=f"New {self._brand_name} Registration",
            html=html,
        )

    def notify_registrant(self, registrant: Registrant) -> bool:
        if not (self._username and self._password):
            logger.warning("EMAIL_USER or EMAIL_PASS not configured - skipping user email.")
            return False

        html = (
            f"<h3>Hello {escape(registrant.name)},</h3>"
            f"<p>Thank you for registering with {escape(self._brand_name)}. "
            "Our team will contact you shortly to arrange onboarding.</p>"
        )
        return self._send(
            to=registrant.email,
            subject=f"Welcome to {self._brand_name}",
            html=html,
        )

    def _send(self, to: str, subject: str, html: str) -> bool:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self._brand_name, self._username))
        msg["To"] = to
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as srv:
                srv.starttls()
                srv.login(self._username, self._password)
                srv.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email send to %s failed: %s", to, e)
            return False

        logger.info("Email sent to %s: %s", to, subject)
        return True
