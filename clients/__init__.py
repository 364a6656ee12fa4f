"""Clients for external services used by LMS Core."""

from .ai_client import AIClient

__all__ = ["AIClient"]
