"""Quiz engine: the state machine for one learner's pass through a quiz."""

import logging
from enum import Enum
from typing import List, Optional

from config.models import Quiz, QuizQuestion, QuizResult
from services.errors import InvalidQuiz, PreconditionViolation

logger = logging.getLogger(__name__)


class AttemptStatus(str, Enum):
    """Named states of an attempt."""
    AWAITING_ANSWER = "awaiting_answer"
    ANSWER_SELECTED = "answer_selected"
    FINISHED = "finished"


def percentage_of(score: int, total: int) -> int:
    """Integer percentage rounded half up (1/3 → 33, 2/3 → 67, 1/8 → 13)."""
    if total <= 0:
        raise ValueError("total must be positive")
    return (200 * score + total) // (2 * total)


class QuizEngine:
    """
    Tracks position, selected answer and score over a fixed question set.

    The engine only moves forward: `advance()` scores the current selection
    and either steps to the next question or finishes the attempt. Misuse
    (advancing without a selection, acting after the finish) raises
    PreconditionViolation.
    """

    def __init__(self, quiz: Quiz):
        if not quiz.questions:
            raise InvalidQuiz(f"Quiz '{quiz.id}' has no questions.")

        self.quiz = quiz
        self._current_index = 0
        self._selected_index: Optional[int] = None
        self._score = 0
        self._status = AttemptStatus.AWAITING_ANSWER
        self._answers: List[int] = []

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def status(self) -> AttemptStatus:
        return self._status

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected_index

    @property
    def score(self) -> int:
        return self._score

    @property
    def is_finished(self) -> bool:
        return self._status is AttemptStatus.FINISHED

    @property
    def total_questions(self) -> int:
        return len(self.quiz.questions)

    @property
    def current_question(self) -> QuizQuestion:
        return self.quiz.questions[self._current_index]

    @property
    def is_last_question(self) -> bool:
        return self._current_index == self.total_questions - 1

    @property
    def progress(self) -> float:
        """Fraction of the quiz reached, counting the current question."""
        return (self._current_index + 1) / self.total_questions

    @property
    def answers(self) -> List[int]:
        """Selections submitted so far, one per advanced question."""
        return list(self._answers)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def select_answer(self, option_index: int) -> None:
        if self.is_finished:
            raise PreconditionViolation("Cannot select an answer after the quiz has finished.")

        option_count = len(self.current_question.options)
        if not 0 <= option_index < option_count:
            raise PreconditionViolation(
                f"Option {option_index} out of range for question {self._current_index} "
                f"({option_count} options)."
            )

        self._selected_index = option_index
        self._status = AttemptStatus.ANSWER_SELECTED

    def advance(self) -> None:
        if self.is_finished:
            raise PreconditionViolation("Cannot advance a finished quiz.")
        if self._selected_index is None:
            raise PreconditionViolation("Cannot advance without a selected answer.")

        selected = self._selected_index
        if selected == self.current_question.correct_option_index:
            self._score += 1
        self._answers.append(selected)

        if self.is_last_question:
            self._status = AttemptStatus.FINISHED
            logger.info(
                f"Quiz {self.quiz.id} finished: {self._score}/{self.total_questions}"
            )
            return

        self._current_index += 1
        self._selected_index = None
        self._status = AttemptStatus.AWAITING_ANSWER

    def result(self) -> QuizResult:
        if not self.is_finished:
            raise PreconditionViolation("Result is only available once the quiz has finished.")

        total = self.total_questions
        return QuizResult(
            score=self._score,
            total=total,
            percentage=percentage_of(self._score, total),
        )
