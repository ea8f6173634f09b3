"""Decoding of Firestore document-created events into feedback records."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from src.config.settings import Settings
from src.feedback.models import FeedbackRecord
from src.lib.exceptions import MalformedRecordError


# Eventarc types for a newly created Firestore document
CREATED_EVENT_TYPES = frozenset({
    "google.cloud.firestore.document.v1.created",
    "google.cloud.firestore.document.v1.created.withAuthContext",
})


def is_created_event(event_type: Optional[str]) -> bool:
    """True for document-created events; updates and deletes are not new feedback."""
    return event_type in CREATED_EVENT_TYPES


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp ("2024-05-01T10:00:00.123456Z") into an aware datetime."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not isinstance(value, str) or not value:
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    # fromisoformat accepts at most microsecond precision
    if "." in text:
        head, _, rest = text.partition(".")
        digits = ""
        for ch in rest:
            if not ch.isdigit():
                break
            digits += ch
        text = f"{head}.{digits[:6].ljust(6, '0')}{rest[len(digits):]}"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _number_or_none(kind, raw: Any):
    try:
        return kind(raw)
    except (TypeError, ValueError):
        return None


def parse_epoch_millis(value: Any) -> Optional[datetime]:
    """Read epoch milliseconds (as written by Date.now() clients), or None if out of range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        return None


def decode_value(value: Dict[str, Any]) -> Any:
    """
    Decode one Firestore REST value into a plain Python value.

    Args:
        value: Typed value, e.g. {"stringValue": "hi"}

    Returns:
        The decoded value (str, int, float, bool, datetime, dict, list or None)
    """
    if not isinstance(value, dict):
        return value
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        return _number_or_none(int, value["integerValue"])
    if "doubleValue" in value:
        # Non-finite doubles arrive as "NaN", "Infinity" and "-Infinity"
        return _number_or_none(float, value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "timestampValue" in value:
        return parse_timestamp(value["timestampValue"])
    if "nullValue" in value:
        return None
    if "mapValue" in value:
        return decode_fields((value["mapValue"] or {}).get("fields", {}))
    if "arrayValue" in value:
        return [decode_value(v) for v in (value["arrayValue"] or {}).get("values", [])]
    if "referenceValue" in value:
        return value["referenceValue"]
    return None


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Decode a Firestore "fields" map."""
    if not isinstance(fields, dict):
        return {}
    return {key: decode_value(val) for key, val in fields.items()}


def document_path(name: str) -> str:
    """
    Strip the "projects/<p>/databases/<d>/documents/" prefix from a resource name.

    "projects/p/databases/(default)/documents/feedback/abc" -> "feedback/abc"
    """
    marker = "/documents/"
    if marker in name:
        return name.split(marker, 1)[1]
    return name.strip("/")


def is_feedback_document(path: str, collection: Optional[str] = None) -> bool:
    """True when the path names a document directly under the feedback collection."""
    collection = collection or Settings.FEEDBACK_COLLECTION
    parts = path.split("/")
    return len(parts) == 2 and parts[0] == collection and parts[1] != ""


def _text_or_default(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def event_document_path(data: Any) -> Optional[str]:
    """Path of the document in an event payload ("feedback/abc"), or None if it carries none."""
    value = data.get("value") if isinstance(data, dict) else None
    if not isinstance(value, dict) or not isinstance(value.get("name"), str) or not value["name"]:
        return None
    return document_path(value["name"])


def build_record(data: Dict[str, Any], now: Optional[datetime] = None) -> FeedbackRecord:
    """
    Turn the payload of a document-created event into a feedback record.

    Missing name and email fall back to the anonymous defaults, a missing
    timestamp falls back to the document create time and then to now.

    Args:
        data: Event data with the created document under "value"
        now: Clock override

    Returns:
        The feedback record

    Raises:
        MalformedRecordError: If the payload carries no document or no usable message
    """
    path = event_document_path(data)
    if path is None:
        raise MalformedRecordError("Event does not carry a created document")

    value = data["value"]
    fields = decode_fields(value.get("fields", {}))

    message = fields.get("message")
    if not isinstance(message, str) or not message.strip():
        raise MalformedRecordError(
            "Feedback record has no message",
            details={"document": path}
        )

    timestamp = fields.get("timestamp")
    if not isinstance(timestamp, datetime):
        timestamp = (
            parse_epoch_millis(timestamp)
            or parse_timestamp(timestamp)
            or parse_timestamp(value.get("createTime"))
            or now
            or datetime.now(timezone.utc)
        )

    return FeedbackRecord(
        document_id=path.rsplit("/", 1)[-1],
        document_path=path,
        name=_text_or_default(fields.get("name"), Settings.ANONYMOUS_NAME),
        email=_text_or_default(fields.get("email"), Settings.NO_EMAIL_PLACEHOLDER),
        message=message.strip(),
        timestamp=timestamp
    )
