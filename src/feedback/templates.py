"""Email bodies for feedback notifications."""

import html
from datetime import datetime

from src.config.settings import Settings
from src.feedback.models import CallerIdentity, FeedbackRecord, FeedbackSubmission
from src.mail.transport import MailMessage


def _html_text(value: str) -> str:
    """Escape for HTML and turn newlines into line breaks."""
    return html.escape(value).replace("\r\n", "\n").replace("\n", "<br>")


def _format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def direct_feedback_email(
    submission: FeedbackSubmission,
    caller: CallerIdentity,
    owner_email: str
) -> MailMessage:
    """Plain-text owner notification for the direct call."""
    text = "\n".join([
        f"User: {submission.name}",
        f"Email: {submission.email}",
        f"Message: {submission.message}",
        f"User ID: {caller.uid}",
    ])
    return MailMessage(
        sender=owner_email,
        to=owner_email,
        subject=f"{Settings.APP_NAME} Feedback from {submission.name}",
        text=text
    )


def owner_notification_email(record: FeedbackRecord, owner_email: str) -> MailMessage:
    """
    Owner notification for a newly created feedback record.

    The HTML variant carries the same content as the text variant, with
    newlines in the message rendered as <br>.
    """
    when = _format_timestamp(record.timestamp)
    text = (
        f"New feedback received for {Settings.APP_NAME}.\n\n"
        f"Name: {record.name}\n"
        f"Email: {record.email}\n"
        f"Submitted: {when}\n\n"
        f"Message:\n{record.message}\n"
    )
    body = (
        f"<h2>New feedback received for {Settings.APP_NAME}</h2>"
        f"<p><strong>Name:</strong> {_html_text(record.name)}<br>"
        f"<strong>Email:</strong> {_html_text(record.email)}<br>"
        f"<strong>Submitted:</strong> {_html_text(when)}</p>"
        f"<p><strong>Message:</strong><br>{_html_text(record.message)}</p>"
    )
    return MailMessage(
        sender=owner_email,
        to=owner_email,
        subject=f"New {Settings.APP_NAME} Feedback from {record.name}",
        text=text,
        html=body
    )


def confirmation_email(record: FeedbackRecord, owner_email: str) -> MailMessage:
    """Confirmation sent back to the submitter, quoting their message."""
    text = (
        f"Hi {record.name},\n\n"
        f"Thanks for taking the time to send feedback on {Settings.APP_NAME}. "
        f"We read every message.\n\n"
        f"Your message:\n{record.message}\n\n"
        f"The {Settings.APP_NAME} team\n"
    )
    body = (
        f"<p>Hi {_html_text(record.name)},</p>"
        f"<p>Thanks for taking the time to send feedback on {Settings.APP_NAME}. "
        f"We read every message.</p>"
        f"<p><strong>Your message:</strong><br>{_html_text(record.message)}</p>"
        f"<p>The {Settings.APP_NAME} team</p>"
    )
    return MailMessage(
        sender=owner_email,
        to=record.email,
        subject=f"Thanks for your feedback on {Settings.APP_NAME}!",
        text=text,
        html=body
    )
