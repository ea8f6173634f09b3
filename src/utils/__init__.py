"""Utility modules for the Chrono feedback service."""

from .logger import (
    setup_logger,
    JsonFormatter
)

__all__ = [
    "setup_logger",
    "JsonFormatter"
]
