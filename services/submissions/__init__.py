"""Activity submission naming and recording."""

from .namer import canonical_name, extension_of
from .recorder import SubmissionRecorder, RecorderStatus

__all__ = ["canonical_name", "extension_of", "SubmissionRecorder", "RecorderStatus"]
