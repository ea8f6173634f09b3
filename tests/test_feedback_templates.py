"""Tests for feedback email rendering."""

from datetime import datetime, timezone

from src.feedback.models import CallerIdentity, FeedbackRecord, FeedbackSubmission
from src.feedback.notifier import messages_for_record, wants_confirmation
from src.feedback.templates import confirmation_email, direct_feedback_email, owner_notification_email


OWNER = 'owner@chrono.app'


def make_record(**overrides):
    values = {
        'document_id': 'abc',
        'document_path': 'feedback/abc',
        'name': 'Bob',
        'email': 'bob@x.com',
        'message': 'Thanks',
        'timestamp': datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return FeedbackRecord(**values)


def test_direct_feedback_email():
    """Test the direct-call body lines."""
    message = direct_feedback_email(
        FeedbackSubmission(name='Alice', email='alice@x.com', message='Great app'),
        CallerIdentity(uid='uid-123'),
        OWNER
    )

    assert message.subject == 'Chrono Feedback from Alice'
    assert message.text.splitlines() == [
        'User: Alice',
        'Email: alice@x.com',
        'Message: Great app',
        'User ID: uid-123',
    ]


def test_owner_notification_escapes_html():
    """Test that submitted markup is escaped in the HTML body only."""
    message = owner_notification_email(make_record(name='<b>Bob</b>'), OWNER)

    assert '&lt;b&gt;Bob&lt;/b&gt;' in message.html
    assert '<b>Bob</b>' in message.text


def test_owner_notification_includes_timestamp():
    """Test that the submission time is rendered."""
    message = owner_notification_email(make_record(), OWNER)

    assert '2024-05-01 10:00:00' in message.text


def test_confirmation_email_addressed_to_submitter():
    """Test the confirmation recipient and quoted message."""
    message = confirmation_email(make_record(message='Thanks\nfor Chrono'), OWNER)

    assert message.to == 'bob@x.com'
    assert message.sender == OWNER
    assert 'Thanks\nfor Chrono' in message.text
    assert 'Thanks<br>for Chrono' in message.html


def test_placeholder_email_skips_confirmation():
    """Test that the placeholder address never gets a confirmation."""
    record = make_record(email='No email provided')

    assert not wants_confirmation(record)
    assert len(messages_for_record(record, OWNER)) == 1
    assert len(messages_for_record(make_record(), OWNER)) == 2


def test_app_name_comes_from_settings():
    """Test that the configured application name is used in subjects and bodies."""
    from unittest.mock import patch

    with patch('src.config.settings.Settings.APP_NAME', 'Chrono Beta'):
        message = confirmation_email(make_record(), OWNER)

    assert message.subject == 'Thanks for your feedback on Chrono Beta!'
    assert 'Chrono Beta team' in message.text
