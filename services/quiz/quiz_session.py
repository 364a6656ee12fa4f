"""One quiz view: an engine plus the hint shown for the current question."""

from typing import Optional

from config.models import Quiz, QuizQuestion, QuizResult
from .engine import QuizEngine
from .hint_mediator import HintMediator


class QuizSession:
    """Facade over QuizEngine and HintMediator for a single attempt."""

    def __init__(self, quiz: Quiz, hint_mediator: HintMediator):
        self.engine = QuizEngine(quiz)
        self.hint_mediator = hint_mediator
        self._hint: Optional[str] = None

    @property
    def quiz(self) -> Quiz:
        return self.engine.quiz

    @property
    def current_question(self) -> QuizQuestion:
        return self.engine.current_question

    @property
    def hint(self) -> Optional[str]:
        return self._hint

    @property
    def is_finished(self) -> bool:
        return self.engine.is_finished

    @property
    def next_label(self) -> str:
        return "Finish Quiz" if self.engine.is_last_question else "Next Question"

    def select_answer(self, option_index: int) -> None:
        self.engine.select_answer(option_index)

    def next_question(self) -> None:
        self.engine.advance()
        if not self.engine.is_finished:
            self._hint = None

    def request_hint(self) -> str:
        self._hint = self.hint_mediator.request_hint(self.engine.current_question.prompt)
        return self._hint

    def result(self) -> QuizResult:
        return self.engine.result()
