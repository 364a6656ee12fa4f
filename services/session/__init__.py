"""Authenticated session state."""

from .session_store import SessionStore

__all__ = ["SessionStore"]
