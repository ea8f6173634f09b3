"""Validation functions for feedback submissions."""

from typing import Any

from src.feedback.models import FeedbackSubmission


REQUIRED_FIELDS = ['name', 'email', 'message']


class ValidationError(Exception):
    """Raised when validation fails."""
    pass


def validate_payload_shape(data: Any) -> dict:
    """
    Validate that the callable payload is a JSON object.

    Args:
        data: The "data" member of the request envelope

    Returns:
        The payload as a dict

    Raises:
        ValidationError: If the payload is not an object
    """
    if not isinstance(data, dict):
        raise ValidationError("Request data must be an object with name, email and message")
    return data


def validate_required_fields(data: dict) -> None:
    """
    Validate that all required fields are present and non-empty strings.

    Args:
        data: Request data dictionary

    Raises:
        ValidationError: Naming the first missing or empty field
    """
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if value is None:
            raise ValidationError(f"Missing required field: {field}")
        if not isinstance(value, str):
            raise ValidationError(f"Field must be a string: {field}")
        if value.strip() == "":
            raise ValidationError(f"Field must not be empty: {field}")


def validate_submission(data: Any) -> FeedbackSubmission:
    """
    Validate a direct-call payload and build the submission.

    Presence only: the email address is not checked for format.

    Raises:
        ValidationError: If the payload or any field is invalid
    """
    payload = validate_payload_shape(data)
    validate_required_fields(payload)
    return FeedbackSubmission(
        name=payload['name'].strip(),
        email=payload['email'].strip(),
        message=payload['message'].strip()
    )
