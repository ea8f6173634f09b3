"""Builds and dispatches feedback notification emails."""

from typing import List

from src.config.settings import Settings
from src.feedback.models import CallerIdentity, FeedbackRecord, FeedbackSubmission
from src.feedback.templates import (
    confirmation_email,
    direct_feedback_email,
    owner_notification_email,
)
from src.mail.transport import MailMessage, MailTransport


def wants_confirmation(record: FeedbackRecord) -> bool:
    """True when the submitter left an address to confirm to."""
    return record.email != Settings.NO_EMAIL_PLACEHOLDER


def messages_for_record(record: FeedbackRecord, owner_email: str) -> List[MailMessage]:
    """Owner notification first, then the optional confirmation."""
    messages = [owner_notification_email(record, owner_email)]
    if wants_confirmation(record):
        messages.append(confirmation_email(record, owner_email))
    return messages


async def send_direct_feedback(
    submission: FeedbackSubmission,
    caller: CallerIdentity,
    transport: MailTransport
) -> None:
    """
    Send the owner notification for a direct feedback call.

    Raises:
        MailDeliveryError: If the relay fails
    """
    owner_email = Settings.get_owner_email()
    await transport.send(direct_feedback_email(submission, caller, owner_email))


async def notify_feedback_created(record: FeedbackRecord, transport: MailTransport) -> int:
    """
    Send the notifications for a created feedback record.

    Messages go out in order and the first failure stops the rest.

    Returns:
        Number of emails sent

    Raises:
        MailDeliveryError: If the relay fails
    """
    sent = 0
    for message in messages_for_record(record, Settings.get_owner_email()):
        await transport.send(message)
        sent += 1
    return sent
