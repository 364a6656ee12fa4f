"""Typed errors raised by LMS Core services.

Programming errors (`InvalidQuiz`, `PreconditionViolation`) are kept apart
from user-recoverable ones (`ValidationError`, `TransferError`,
`PersistenceError`) so callers can branch on the failure kind.
"""

from typing import Optional


class LMSError(Exception):
    """Base class for every error raised by the core."""


# ----------------------------------------------------------------------
# Programming errors
# ----------------------------------------------------------------------

class InvalidQuiz(LMSError):
    """Quiz is malformed or has no questions; it cannot enter the engine."""


class PreconditionViolation(LMSError):
    """An operation was called in a state that does not allow it."""


# ----------------------------------------------------------------------
# User-recoverable errors
# ----------------------------------------------------------------------

class ValidationError(LMSError):
    """Required input is missing or empty."""

    def __init__(self, message: str, missing_fields: Optional[list] = None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])


class NotFoundError(LMSError):
    """Requested record does not exist."""


class AccessDenied(LMSError):
    """The active user may not perform the operation."""


# ----------------------------------------------------------------------
# External collaborator errors
# ----------------------------------------------------------------------

class TransferError(LMSError):
    """Object storage failed to accept a file."""


class PersistenceError(LMSError):
    """Structured data store failed to read or write.

    `orphaned_location` is set when a file was already stored but its
    submission record could not be written.
    """

    def __init__(self, message: str, orphaned_location: Optional[str] = None):
        super().__init__(message)
        self.orphaned_location = orphaned_location


class TextGenerationError(LMSError):
    """Text generation service is unavailable or returned an error."""
