"""
FastAPI dependencies - Dependency injection factories.

This module builds the infrastructure adapters selected by configuration
and provides Depends() factories for injecting them into routes.
"""

import logging

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.captcha.recaptcha import RecaptchaVerifier
from src.adapters.repository.memory import InMemoryRegistrantRepository
from src.adapters.repository.postgres import PostgresRegistrantRepository
from src.adapters.smtp.console import ConsoleNotifier
from src.adapters.smtp.mailer import SmtpNotifier
from src.config.settings import Settings
from src.domain.ports import BotVerifier, Notifier, RegistrantRepository
from src.domain.signup import SignupService

logger = logging.getLogger(__name__)


def build_repository(pool: ConnectionPool | None) -> RegistrantRepository:
    """Durable store when a pool exists, in-memory fallback otherwise."""
    if pool is None:
        logger.warning("No database configured - using in-memory registrant store")
        return InMemoryRegistrantRepository()
    return PostgresRegistrantRepository(pool)


def build_verifier(settings: Settings) -> BotVerifier:
    """reCAPTCHA verifier; bypasses when no secret is configured."""
    return RecaptchaVerifier(
        secret=settings.recaptcha_secret,
        min_score=settings.recaptcha_min_score,
        verify_url=settings.recaptcha_verify_url,
        timeout=settings.recaptcha_timeout_seconds,
    )


def build_notifier(settings: Settings) -> Notifier:
    """Notifier for the configured backend."""
    if settings.notifier_backend == "console":
        return ConsoleNotifier(admin_email=settings.admin_email)
    return SmtpNotifier(
        username=settings.email_user,
        password=settings.email_pass,
        admin_email=settings.admin_email,
        host=settings.smtp_host,
        port=settings.smtp_port,
        timeout=settings.smtp_timeout_seconds,
        brand_name=settings.brand_name,
    )


def get_repository(request: Request) -> RegistrantRepository:
    """
    Get registrant store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_verifier(request: Request) -> BotVerifier:
    """Get bot-mitigation verifier from app state."""
    return request.app.state.verifier


def get_notifier(request: Request) -> Notifier:
    """Get notifier from app state."""
    return request.app.state.notifier


def get_signup_service(request: Request) -> SignupService:
    """
    Create signup service with injected dependencies.

    Wires together the store, verifier and notifier for the domain service.
    """
    return SignupService(
        repository=get_repository(request),
        verifier=get_verifier(request),
        notifier=get_notifier(request),
    )
