"""
Application configuration settings for the Chrono feedback service.
"""

import os
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings configuration."""

    # Application Configuration
    APP_NAME = os.getenv("APP_NAME", "Chrono")
    APP_VERSION = "1.0.0"

    # Mail relay (credentials are only ever read from the environment)
    GMAIL_USER = os.getenv("GMAIL_USER")
    OWNER_EMAIL = os.getenv("OWNER_EMAIL") or GMAIL_USER
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "465"))
    SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "30"))

    # Firebase
    FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
    FEEDBACK_COLLECTION = os.getenv("FEEDBACK_COLLECTION", "feedback")
    NOTIFICATION_LEDGER_COLLECTION = os.getenv(
        "NOTIFICATION_LEDGER_COLLECTION", "feedbackNotifications"
    )

    # Dedup backend for the document-created trigger: firestore, memory or none
    FEEDBACK_LEDGER = os.getenv("FEEDBACK_LEDGER", "memory").lower()

    # Record defaults
    ANONYMOUS_NAME = "Anonymous User"
    NO_EMAIL_PLACEHOLDER = "No email provided"

    # HTTP
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    @classmethod
    def get_owner_email(cls) -> str:
        """Get the address that receives (and sends) feedback notifications."""
        if not cls.OWNER_EMAIL:
            raise ValueError("OWNER_EMAIL or GMAIL_USER environment variable not set")
        return cls.OWNER_EMAIL

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Get the list of allowed CORS origins."""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]
