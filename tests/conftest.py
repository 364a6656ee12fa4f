import sys
from pathlib import Path
from types import SimpleNamespace

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.models import Profile, Quiz, UserRole
from services.datastore import LocalDataStore
from services.errors import PersistenceError, TextGenerationError, TransferError
from services.storage import ObjectStorage


class FakeGenerator:
    def __init__(self, reply="Think about what plants breathe in.", configured=True, fail=False):
        self.reply = reply
        self.is_configured = configured
        self.fail = fail
        self.calls = []

    def complete(self, system_instruction, user_prompt, temperature=None, max_tokens=None):
        self.calls.append((system_instruction, user_prompt, temperature))
        if self.fail:
            raise TextGenerationError("service unavailable")
        return self.reply


class FakeStorage(ObjectStorage):
    def __init__(self, fail=False):
        self.fail = fail
        self.stored = []

    def store(self, name, data, mime_type=None):
        if self.fail:
            raise TransferError("bucket unreachable")
        self.stored.append((name, data, mime_type))
        return f"memory://uploads/{len(self.stored)}/{name}"


class FlakyDataStore(LocalDataStore):
    """Local store whose inserts fail while `failures` is positive."""

    def __init__(self, failures=1):
        super().__init__()
        self.failures = failures
        self.insert_calls = 0

    def insert(self, collection, record):
        self.insert_calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceError("database timeout")
        return super().insert(collection, record)


def make_quiz(n=3, quiz_id="quiz-1"):
    return Quiz.model_validate({
        "id": quiz_id,
        "title": "Sample",
        "lesson_id": "lesson-1",
        "questions_json": [
            {"question": f"Question {i}?", "options": ["A", "B", "C"], "correct_answer": i % 3}
            for i in range(n)
        ],
    })


def fake_openai(content="A helpful hint."):
    """Object shaped like the OpenAI client for chat completions."""
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return client, calls


@pytest.fixture
def quiz():
    return make_quiz()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def datastore():
    return LocalDataStore()


@pytest.fixture
def teacher():
    return Profile(id="teacher-1", full_name="Ada Teacher", role=UserRole.TEACHER)


@pytest.fixture
def student():
    return Profile(id="student-1", full_name="Jane Doe", role=UserRole.STUDENT)


@pytest.fixture
def aws_credentials(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
