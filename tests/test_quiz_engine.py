import pytest

from config.models import Quiz
from services.errors import InvalidQuiz, PreconditionViolation
from services.quiz import AttemptStatus, QuizEngine, percentage_of
from conftest import make_quiz


def _answer_all(engine, choices):
    for choice in choices:
        engine.select_answer(choice)
        engine.advance()


def test_initial_state(quiz):
    engine = QuizEngine(quiz)
    assert engine.current_index == 0
    assert engine.selected_index is None
    assert engine.score == 0
    assert not engine.is_finished
    assert engine.status is AttemptStatus.AWAITING_ANSWER


def test_empty_quiz_is_rejected():
    with pytest.raises(InvalidQuiz):
        QuizEngine(Quiz(id="empty", title="Nothing here"))


@pytest.mark.parametrize("n", [1, 2, 5])
def test_finishes_exactly_on_nth_advance(n):
    engine = QuizEngine(make_quiz(n))
    for i in range(n):
        assert not engine.is_finished
        engine.select_answer(0)
        engine.advance()
        assert engine.is_finished == (i == n - 1)
    assert engine.status is AttemptStatus.FINISHED
    assert engine.current_index == n - 1


def test_score_counts_correct_selections(quiz):
    engine = QuizEngine(quiz)
    # correct answers are 0, 1, 2
    _answer_all(engine, [0, 2, 2])
    assert engine.score == 2
    assert engine.answers == [0, 2, 2]


def test_score_never_exceeds_answered_questions(quiz):
    engine = QuizEngine(quiz)
    for choice in [0, 1, 2]:
        engine.select_answer(choice)
        engine.advance()
        if not engine.is_finished:
            assert engine.score <= engine.current_index


def test_selection_can_change_before_advancing(quiz):
    engine = QuizEngine(quiz)
    engine.select_answer(2)
    engine.select_answer(0)
    assert engine.selected_index == 0
    assert engine.status is AttemptStatus.ANSWER_SELECTED
    engine.advance()
    assert engine.score == 1


def test_advance_clears_selection(quiz):
    engine = QuizEngine(quiz)
    engine.select_answer(1)
    engine.advance()
    assert engine.current_index == 1
    assert engine.selected_index is None
    assert engine.status is AttemptStatus.AWAITING_ANSWER


def test_advance_twice_without_selection_fails(quiz):
    engine = QuizEngine(quiz)
    engine.select_answer(0)
    engine.advance()
    with pytest.raises(PreconditionViolation):
        engine.advance()


def test_select_out_of_range_option_fails(quiz):
    engine = QuizEngine(quiz)
    with pytest.raises(PreconditionViolation):
        engine.select_answer(3)
    with pytest.raises(PreconditionViolation):
        engine.select_answer(-1)


def test_no_transitions_after_finish():
    engine = QuizEngine(make_quiz(1))
    engine.select_answer(0)
    engine.advance()
    with pytest.raises(PreconditionViolation):
        engine.select_answer(1)
    with pytest.raises(PreconditionViolation):
        engine.advance()
    assert engine.score == 1


def test_result_only_when_finished(quiz):
    engine = QuizEngine(quiz)
    with pytest.raises(PreconditionViolation):
        engine.result()


@pytest.mark.parametrize("choices,score,percentage", [
    ([1, 0, 0], 0, 0),
    ([0, 0, 0], 1, 33),
    ([0, 1, 0], 2, 67),
    ([0, 1, 2], 3, 100),
])
def test_result_percentages(quiz, choices, score, percentage):
    engine = QuizEngine(quiz)
    _answer_all(engine, choices)
    result = engine.result()
    assert (result.score, result.total, result.percentage) == (score, 3, percentage)


def test_percentage_rounds_half_up():
    assert percentage_of(1, 8) == 13
    assert percentage_of(1, 200) == 1
    assert percentage_of(0, 1) == 0


def test_progress_and_last_question(quiz):
    engine = QuizEngine(quiz)
    assert engine.progress == pytest.approx(1 / 3)
    assert not engine.is_last_question
    _answer_all(engine, [0, 0])
    assert engine.is_last_question
    assert engine.progress == pytest.approx(1.0)
