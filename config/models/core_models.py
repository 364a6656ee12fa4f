"""Data models for LMS Core."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4
from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ----------------------------------------------------------------------
# ENUMERATIONS
# ----------------------------------------------------------------------

class UserRole(str, Enum):
    """Roles a signed-in user can hold."""
    TEACHER = "Teacher"
    STUDENT = "Student"


class ChatRole(str, Enum):
    """Author of a tutor chat message."""
    USER = "user"
    AI = "ai"


# ----------------------------------------------------------------------
# IDENTITY AND CONTENT
# ----------------------------------------------------------------------

class Profile(BaseModel):
    """Authenticated user profile from the `profiles` collection."""
    id: str
    full_name: str
    role: UserRole
    email: Optional[str] = None


class Lesson(BaseModel):
    """Lesson from the `lessons` collection."""
    id: str
    title: str
    content: str = ""
    due_date: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class UserProgress(BaseModel):
    """Marks a lesson as completed by a user."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    lesson_id: str
    completed_at: datetime = Field(default_factory=utc_now)


class ChatMessage(BaseModel):
    """One turn of the lesson tutor conversation."""
    role: ChatRole
    text: str


# ----------------------------------------------------------------------
# SUBMISSIONS
# ----------------------------------------------------------------------

class SelectedFile(BaseModel):
    """File picked by the learner for upload."""
    name: str
    byte_size: int = Field(ge=0)
    mime_type: str = "application/octet-stream"
    content: bytes = b""

    @classmethod
    def from_bytes(cls, name: str, content: bytes, mime_type: Optional[str] = None) -> "SelectedFile":
        return cls(
            name=name,
            byte_size=len(content),
            mime_type=mime_type or "application/octet-stream",
            content=content,
        )


class SubmissionRequest(BaseModel):
    """Inputs of a single submit operation."""
    owner_display_name: str
    activity_name: str
    selected_file: Optional[SelectedFile] = None


class SubmissionRecord(BaseModel):
    """Persisted submission, stored under the original column names."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    owner_id: str = Field(alias="user_id")
    activity_name: str
    external_file_location: str = Field(alias="drive_link")
    created_at: datetime = Field(default_factory=utc_now)

    def to_record(self) -> dict:
        """Serialize for the data store."""
        return self.model_dump(mode="json", by_alias=True)


class GradebookRow(BaseModel):
    """Submission joined with the submitting student's profile."""
    submission: SubmissionRecord
    student: Optional[Profile] = None

    @property
    def student_name(self) -> str:
        return self.student.full_name if self.student else "Unknown student"


class Collections:
    """Collection names in the structured data store."""
    PROFILES = "profiles"
    LESSONS = "lessons"
    QUIZZES = "quizzes"
    SUBMISSIONS = "submissions"
    USER_PROGRESS = "user_progress"

    ALL: List[str] = [PROFILES, LESSONS, QUIZZES, SUBMISSIONS, USER_PROGRESS]
