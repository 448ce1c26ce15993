"""Notifier adapters - SMTP relay and console implementations."""

from .console import ConsoleNotifier
from .mailer import SmtpNotifier

__all__ = ["ConsoleNotifier", "SmtpNotifier"]
