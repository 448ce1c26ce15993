"""
Configuration diagnostics - startup report of configuration completeness.

Checks only what is configured; it never connects to the database, the
mail relay or the verification endpoint, and never writes test records.
"""

import logging
from dataclasses import dataclass

from src.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigCheck:
    """One line of the configuration report."""

    name: str
    ok: bool
    detail: str
    severity: str = "error"  # "error" or "warning"


def check_configuration(settings: Settings) -> list[ConfigCheck]:
    """Evaluate every optional integration against the loaded settings."""
    checks = [
        ConfigCheck(
            "database",
            bool(settings.database_url),
            "DATABASE_URL is set"
            if settings.database_url
            else "DATABASE_URL not set - using in-memory store (data is lost on restart)",
            severity="warning",
        ),
    ]

    if settings.notifier_backend == "console":
        checks.append(ConfigCheck("mail", True, "console notifier - emails are logged, not sent"))
    else:
        mail_ready = bool(settings.email_user and settings.email_pass)
        checks.append(
            ConfigCheck(
                "mail",
                mail_ready,
                f"relay account configured for {settings.smtp_host}:{settings.smtp_port}"
                if mail_ready
                else "EMAIL_USER or EMAIL_PASS not set - notifications disabled",
            )
        )
        checks.append(
            ConfigCheck(
                "admin_email",
                bool(settings.admin_email),
                "ADMIN_EMAIL is set"
                if settings.admin_email
                else "ADMIN_EMAIL not set - admin alerts disabled",
            )
        )

    checks.append(
        ConfigCheck(
            "recaptcha",
            bool(settings.recaptcha_secret),
            f"RECAPTCHA_SECRET is set (min score {settings.recaptcha_min_score})"
            if settings.recaptcha_secret
            else "RECAPTCHA_SECRET not set - verification bypassed",
            severity="warning",
        )
    )

    index = settings.static_dir / "index.html"
    checks.append(ConfigCheck("landing_page", index.is_file(), f"landing page at {index}"))
    return checks


def log_configuration_report(settings: Settings) -> bool:
    """
    Log the configuration report.

    Returns:
        True if no error-severity check failed
    """
    healthy = True
    for check in check_configuration(settings):
        if check.ok:
            logger.info("[config] %s: %s", check.name, check.detail)
        elif check.severity == "warning":
            logger.warning("[config] %s: %s", check.name, check.detail)
        else:
            healthy = False
            logger.error("[config] %s: %s", check.name, check.detail)
    return healthy
