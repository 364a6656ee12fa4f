from .core_models import (
    UserRole,
    ChatRole,
    Profile,
    Lesson,
    UserProgress,
    ChatMessage,
    SelectedFile,
    SubmissionRequest,
    SubmissionRecord,
    GradebookRow,
    Collections,
)
from .quiz_models import (
    QuizQuestion,
    Quiz,
    QuizResult,
)

__all__ = [
    "UserRole",
    "ChatRole",
    "Profile",
    "Lesson",
    "UserProgress",
    "ChatMessage",
    "SelectedFile",
    "SubmissionRequest",
    "SubmissionRecord",
    "GradebookRow",
    "Collections",
    "QuizQuestion",
    "Quiz",
    "QuizResult",
]
