"""FastAPI endpoints for feedback notifications."""

from typing import Optional

from cloudevents import exceptions as cloud_exceptions
from cloudevents.http import from_http
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from src.feedback.auth import get_caller_identity
from src.feedback.events import (
    build_record,
    event_document_path,
    is_created_event,
    is_feedback_document,
)
from src.feedback.ledger import NotificationLedger, NullLedger, create_ledger
from src.feedback.models import CallableRequest, CallableResponse, CallerIdentity, EventAck
from src.feedback.notifier import notify_feedback_created, send_direct_feedback
from src.feedback.validation import ValidationError, validate_submission
from src.lib.exceptions import (
    CallableError,
    Internal,
    InvalidArgument,
    MailDeliveryError,
    MalformedRecordError,
    Unauthenticated,
    format_exception_details,
)
from src.mail.transport import MailTransport
from src.utils.logger import setup_logger


# Create router
router = APIRouter()

# Setup logger
feedback_logger = setup_logger("chrono.feedback")

# Shared clients (initialized once at startup, read-only afterwards)
mail_transport: Optional[MailTransport] = None
notification_ledger: Optional[NotificationLedger] = None


def init_mail_transport():
    """Initialize the mail transport (call at startup)."""
    global mail_transport
    try:
        mail_transport = MailTransport()
        feedback_logger.info("Mail transport initialized successfully", extra={
            "data": {"host": mail_transport.host, "port": mail_transport.port}
        })
    except ValueError as e:
        feedback_logger.error(f"Failed to initialize mail transport: {e}")
        raise


def init_notification_ledger(backend: Optional[str] = None):
    """Initialize the dedup ledger for document-created events (call at startup)."""
    global notification_ledger
    notification_ledger = create_ledger(backend)
    feedback_logger.info("Notification ledger initialized", extra={
        "data": {"ledger": type(notification_ledger).__name__}
    })


def register_exception_handlers(app: FastAPI) -> None:
    """Render callable errors and mail failures in the structured error shape."""

    @app.exception_handler(CallableError)
    async def callable_error_handler(request: Request, exc: CallableError):
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @app.exception_handler(MailDeliveryError)
    async def mail_error_handler(request: Request, exc: MailDeliveryError):
        return JSONResponse(
            status_code=500,
            content=Internal("Error sending feedback notification.").to_dict()
        )


@router.post("/sendFeedback", response_model=CallableResponse)
async def send_feedback(
    request: Request,
    caller: Optional[CallerIdentity] = Depends(get_caller_identity)
):
    """
    Direct feedback call: email the owner about an authenticated user's feedback.

    Request body: {"data": {"name": ..., "email": ..., "message": ...}}

    Returns:
        {"result": {"success": true}}

    Raises:
        Unauthenticated: If no verified identity is attached
        InvalidArgument: If name, email or message is missing or empty
        Internal: If the email could not be sent
    """
    # Identity comes first; the payload is not looked at for anonymous calls
    if caller is None:
        raise Unauthenticated("You must be logged in to send feedback.")

    try:
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Request body must be JSON")
        if not isinstance(body, dict):
            raise ValidationError("Request body must be an object")

        envelope = CallableRequest.model_validate(body)
        submission = validate_submission(envelope.data)

        if mail_transport is None:
            raise Internal("Mail transport not initialized")

        await send_direct_feedback(submission, caller, mail_transport)

        feedback_logger.info("feedback_email_sent", extra={
            "data": {"uid": caller.uid, "submitter_email": submission.email}
        })

        return CallableResponse(result={"success": True})

    except ValidationError as e:
        raise InvalidArgument(str(e))

    except MailDeliveryError as e:
        feedback_logger.error("feedback_email_failed", extra={
            "data": {"uid": caller.uid, "error": format_exception_details(e)}
        })
        raise Internal("Error sending feedback email.", details={"cause": e.message})

    except CallableError:
        raise

    except Exception as e:
        feedback_logger.error("feedback_unexpected_error", extra={
            "data": {"uid": caller.uid, "error_type": type(e).__name__, "error": str(e)}
        })
        raise Internal("An internal error occurred")


@router.post("/events/feedback-created", response_model=EventAck)
async def on_feedback_created(request: Request):
    """
    Document-created trigger for the feedback collection.

    Accepts a CloudEvent in structured or binary content mode. Only
    document-created events for the feedback collection send email; other
    event types are acknowledged and ignored. Malformed records are logged and
    acknowledged so the platform does not redeliver them; send failures
    propagate so it may.
    """
    try:
        event = from_http(dict(request.headers), await request.body())
    except cloud_exceptions.GenericException as e:
        feedback_logger.error("feedback_event_unreadable", extra={
            "data": {"error_type": type(e).__name__, "error": str(e)}
        })
        return EventAck(status="rejected")

    if not is_created_event(event["type"]):
        feedback_logger.debug("feedback_event_ignored", extra={
            "data": {"event_id": event["id"], "type": event["type"]}
        })
        return EventAck(status="ignored")

    path = event_document_path(event.data)
    if path is None:
        feedback_logger.error("feedback_event_without_document")
        return EventAck(status="rejected")

    if not is_feedback_document(path):
        feedback_logger.debug("feedback_event_ignored", extra={"data": {"document": path}})
        return EventAck(status="ignored", document=path)

    try:
        record = build_record(event.data)
    except MalformedRecordError as e:
        feedback_logger.error("feedback_record_malformed", extra={
            "data": {"document": path, "error": format_exception_details(e)}
        })
        return EventAck(status="rejected", document=path)

    ledger = notification_ledger if notification_ledger is not None else NullLedger()
    if not ledger.claim(record.document_path):
        feedback_logger.info("feedback_event_duplicate", extra={"data": {"document": path}})
        return EventAck(status="duplicate", document=path)

    try:
        if mail_transport is None:
            raise MailDeliveryError("Mail transport not initialized")
        sent = await notify_feedback_created(record, mail_transport)
    except Exception as e:
        ledger.release(record.document_path)
        feedback_logger.error("feedback_notification_failed", extra={
            "data": {"document": path, "error_type": type(e).__name__, "error": str(e)}
        })
        raise

    feedback_logger.info("feedback_notification_sent", extra={
        "data": {"document": path, "emails_sent": sent}
    })
    return EventAck(status="sent", emails_sent=sent, document=path)
