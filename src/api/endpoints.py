"""FastAPI application for the Chrono feedback service."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import src.feedback.endpoints as feedback_endpoints
from src.config.settings import Settings
from src.feedback import (
    feedback_router,
    init_mail_transport,
    init_notification_ledger,
    register_exception_handlers,
)
from src.utils.logger import setup_logger


# Initialize logger for API diagnostics
api_logger = setup_logger("chrono.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Lifespan context manager for startup/shutdown."""
    # Startup: build the shared mail transport and ledger once
    try:
        init_mail_transport()
    except ValueError as e:
        api_logger.warning("mail_transport_unavailable", extra={"data": {"error": str(e)}})

    init_notification_ledger()
    api_logger.info("startup_complete", extra={
        "data": {"mail_ready": feedback_endpoints.mail_transport is not None}
    })

    yield

    api_logger.info("shutdown")


# Create FastAPI app
app = FastAPI(
    title="Chrono Feedback API",
    description="Feedback notification emails for the Chrono app",
    version=Settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"]
)

register_exception_handlers(app)
app.include_router(feedback_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "mail_ready": feedback_endpoints.mail_transport is not None
    }
