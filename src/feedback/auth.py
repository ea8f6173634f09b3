"""Caller identity from Firebase ID tokens."""

from typing import Optional

import firebase_admin
from firebase_admin import auth as firebase_auth
from fastapi import Request

from src.config.settings import Settings
from src.feedback.models import CallerIdentity
from src.utils.logger import setup_logger


auth_logger = setup_logger("chrono.auth")


def get_firebase_app() -> firebase_admin.App:
    """Return the default Firebase app, initializing it once."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        options = {"projectId": Settings.FIREBASE_PROJECT_ID} if Settings.FIREBASE_PROJECT_ID else None
        return firebase_admin.initialize_app(options=options)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an "Authorization: Bearer <token>" header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def verify_id_token(token: str) -> Optional[CallerIdentity]:
    """
    Verify a Firebase ID token.

    Args:
        token: Raw ID token from the client

    Returns:
        The verified identity, or None if the token is rejected
    """
    try:
        claims = firebase_auth.verify_id_token(token, app=get_firebase_app())
    except (ValueError, firebase_auth.InvalidIdTokenError,
            firebase_auth.ExpiredIdTokenError, firebase_auth.RevokedIdTokenError,
            firebase_auth.CertificateFetchError) as e:
        auth_logger.warning("id_token_rejected", extra={
            "data": {"error_type": type(e).__name__}
        })
        return None

    return CallerIdentity(uid=claims["uid"], email=claims.get("email"))


async def get_caller_identity(request: Request) -> Optional[CallerIdentity]:
    """
    FastAPI dependency resolving the verified caller, or None.

    Missing and invalid tokens both resolve to None; the handler decides
    what an anonymous call means.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return None
    return verify_id_token(token)
