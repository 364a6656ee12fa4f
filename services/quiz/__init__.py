"""Quiz taking: engine, hints and the per-view session."""

from .engine import QuizEngine, AttemptStatus, percentage_of
from .hint_mediator import HintMediator
from .quiz_session import QuizSession

__all__ = ["QuizEngine", "AttemptStatus", "percentage_of", "HintMediator", "QuizSession"]
