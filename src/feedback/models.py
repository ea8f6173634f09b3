"""Pydantic models for feedback API."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CallableRequest(BaseModel):
    """Callable-function request envelope: {"data": {...}}."""
    data: Any = None


class FeedbackSubmission(BaseModel):
    """Validated feedback from the direct call."""
    name: str
    email: str
    message: str


class CallerIdentity(BaseModel):
    """Verified caller attached by the identity provider."""
    uid: str
    email: Optional[str] = None


class CallableResponse(BaseModel):
    """Success envelope for callable functions."""
    result: Dict[str, Any]


class FeedbackRecord(BaseModel):
    """Feedback document read from a document-created event."""
    document_id: str
    document_path: str
    name: str
    email: str
    message: str
    timestamp: datetime


class EventAck(BaseModel):
    """Acknowledgment returned to the event delivery platform."""
    status: str
    emails_sent: int = Field(default=0, ge=0)
    document: Optional[str] = None
