"""Lessons, lesson progress and the lesson tutor."""

from .catalog import LessonCatalog
from .tutor import LessonTutor

__all__ = ["LessonCatalog", "LessonTutor"]
