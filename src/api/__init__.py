"""FastAPI application for the Chrono feedback service."""

from .endpoints import app

__all__ = [
    "app"
]
