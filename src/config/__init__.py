"""Configuration for the Chrono feedback service."""

from .settings import Settings

__all__ = ["Settings"]
