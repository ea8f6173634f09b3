"""Shared exceptions for the Chrono feedback service."""
