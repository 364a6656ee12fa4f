"""Quiz data models used by the quiz engine and lesson catalog."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class QuizQuestion(BaseModel):
    """Single multiple-choice question. Immutable once loaded."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    prompt: str = Field(alias="question")
    options: List[str]
    correct_option_index: int = Field(alias="correct_answer")

    @model_validator(mode="after")
    def _check_options(self) -> "QuizQuestion":
        if len(self.options) < 2:
            raise ValueError("a question needs at least two options")
        if not 0 <= self.correct_option_index < len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_option_index} out of range "
                f"for {len(self.options)} options"
            )
        return self


class Quiz(BaseModel):
    """Quiz as stored in the `quizzes` collection."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    lesson_id: Optional[str] = None
    questions: List[QuizQuestion] = Field(default_factory=list, alias="questions_json")


class QuizResult(BaseModel):
    """Terminal result of a finished attempt."""
    score: int = Field(ge=0)
    total: int = Field(gt=0)
    percentage: int = Field(ge=0, le=100)
