"""Lesson catalog: lessons, their quizzes, and per-user progress."""

import logging
from typing import List, Optional

from pydantic import ValidationError as SchemaError

from config.models import Collections, Lesson, Quiz, UserProgress
from services.datastore import DataStore
from services.errors import InvalidQuiz, NotFoundError

logger = logging.getLogger(__name__)


class LessonCatalog:
    """Read access to course content plus lesson completion tracking."""

    def __init__(self, datastore: DataStore):
        self.datastore = datastore

    # ------------------------------------------------------------------
    # Lessons
    # ------------------------------------------------------------------
    def list_lessons(self, search: str = "") -> List[Lesson]:
        """Lessons newest first, filtered by a case-insensitive title match."""
        rows = self.datastore.fetch_all(Collections.LESSONS)
        lessons = sorted((Lesson.model_validate(r) for r in rows), key=lambda l: l.created_at, reverse=True)

        needle = search.strip().lower()
        if needle:
            lessons = [l for l in lessons if needle in l.title.lower()]
        return lessons

    def get_lesson(self, lesson_id: str) -> Lesson:
        row = self.datastore.fetch_one(Collections.LESSONS, lesson_id)
        if row is None:
            raise NotFoundError(f"Lesson {lesson_id} not found.")
        return Lesson.model_validate(row)

    # ------------------------------------------------------------------
    # Quizzes
    # ------------------------------------------------------------------
    def list_quizzes(self, lesson_id: Optional[str] = None) -> List[Quiz]:
        """Quizzes, optionally only those of one lesson. Malformed records are skipped."""
        filters = {"lesson_id": lesson_id} if lesson_id else None
        quizzes = []
        for row in self.datastore.fetch_all(Collections.QUIZZES, filters=filters):
            try:
                quizzes.append(Quiz.model_validate(row))
            except SchemaError as e:
                logger.warning(f"Skipping malformed quiz {row.get('id')}: {e}")
        return quizzes

    def load_quiz(self, quiz_id: str) -> Quiz:
        """Load a quiz ready for the engine."""
        row = self.datastore.fetch_one(Collections.QUIZZES, quiz_id)
        if row is None:
            raise NotFoundError(f"Quiz {quiz_id} not found.")

        try:
            quiz = Quiz.model_validate(row)
        except SchemaError as e:
            raise InvalidQuiz(f"Quiz {quiz_id} is malformed: {e}") from e

        if not quiz.questions:
            raise InvalidQuiz(f"Quiz {quiz_id} has no questions.")
        return quiz

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------
    def is_lesson_completed(self, user_id: str, lesson_id: str) -> bool:
        rows = self.datastore.fetch_all(
            Collections.USER_PROGRESS, filters={"user_id": user_id, "lesson_id": lesson_id}
        )
        return bool(rows)

    def mark_lesson_complete(self, user_id: str, lesson_id: str) -> UserProgress:
        """Record completion once; later calls return the existing entry."""
        rows = self.datastore.fetch_all(
            Collections.USER_PROGRESS, filters={"user_id": user_id, "lesson_id": lesson_id}
        )
        if rows:
            return UserProgress.model_validate(rows[0])

        progress = UserProgress(user_id=user_id, lesson_id=lesson_id)
        self.datastore.insert(Collections.USER_PROGRESS, progress.model_dump(mode="json"))
        logger.info(f"User {user_id} completed lesson {lesson_id}")
        return progress
