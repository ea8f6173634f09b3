"""Feedback notification module."""

from src.feedback.endpoints import (
    router as feedback_router,
    init_mail_transport,
    init_notification_ledger,
    register_exception_handlers,
)

__all__ = [
    'feedback_router',
    'init_mail_transport',
    'init_notification_ledger',
    'register_exception_handlers',
]
