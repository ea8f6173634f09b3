"""Outbound mail for the Chrono feedback service."""

from src.mail.transport import MailMessage, MailTransport

__all__ = ['MailMessage', 'MailTransport']
