from services.quiz import HintMediator, QuizSession
from services.quiz.hint_mediator import FAILED_HINT, HINT_INSTRUCTION, UNCONFIGURED_HINT
from conftest import FakeGenerator


def test_hint_is_returned_verbatim(generator):
    mediator = HintMediator(generator, temperature=0.9)
    assert mediator.request_hint("Which gas do plants absorb?") == generator.reply

    instruction, prompt, temperature = generator.calls[0]
    assert instruction == HINT_INSTRUCTION
    assert "Which gas do plants absorb?" in prompt
    assert "without giving the direct answer" in prompt
    assert temperature == 0.9


def test_unconfigured_generator_is_not_called():
    generator = FakeGenerator(configured=False)
    assert HintMediator(generator).request_hint("Q?") == UNCONFIGURED_HINT
    assert generator.calls == []


def test_missing_generator_returns_fallback():
    assert HintMediator(None).request_hint("Q?") == UNCONFIGURED_HINT


def test_generation_failure_returns_fallback():
    generator = FakeGenerator(fail=True)
    assert HintMediator(generator).request_hint("Q?") == FAILED_HINT
    assert len(generator.calls) == 1


def test_each_request_goes_to_the_generator(generator):
    mediator = HintMediator(generator)
    mediator.request_hint("Q?")
    mediator.request_hint("Q?")
    assert len(generator.calls) == 2


def test_session_hint_is_cleared_on_next_question(quiz, generator):
    session = QuizSession(quiz, HintMediator(generator))
    assert session.hint is None
    session.request_hint()
    assert session.hint == generator.reply
    assert "Question 0?" in generator.calls[0][1]

    session.select_answer(0)
    session.next_question()
    assert session.hint is None
    assert session.current_question.prompt == "Question 1?"


def test_session_runs_to_result(quiz, generator):
    session = QuizSession(quiz, HintMediator(generator))
    labels = []
    for choice in [0, 1, 1]:
        labels.append(session.next_label)
        session.select_answer(choice)
        session.next_question()
    assert labels == ["Next Question", "Next Question", "Finish Quiz"]
    assert session.is_finished
    assert session.result().score == 2
