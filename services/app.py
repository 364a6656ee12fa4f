"""Composition root: builds every collaborator from settings and injects them."""

import logging
from dataclasses import dataclass
from typing import Optional

from clients.ai_client import AIClient
from config.models import Lesson, Quiz
from config.settings import Settings, get_config
from services.datastore import DataStore, create_data_store
from services.gradebook import Gradebook
from services.lessons import LessonCatalog, LessonTutor
from services.quiz import HintMediator, QuizSession
from services.session import SessionStore
from services.storage import ObjectStorage, create_object_storage
from services.submissions import SubmissionRecorder

logger = logging.getLogger(__name__)


@dataclass
class LMSApp:
    """Explicitly constructed collaborators and the services built on them."""

    settings: Settings
    ai_client: AIClient
    datastore: DataStore
    storage: ObjectStorage
    session: SessionStore
    catalog: LessonCatalog
    hints: HintMediator
    recorder: SubmissionRecorder
    gradebook: Gradebook

    def start_quiz(self, quiz_id: str) -> QuizSession:
        quiz: Quiz = self.catalog.load_quiz(quiz_id)
        return QuizSession(quiz, self.hints)

    def open_tutor(self, lesson_id: str) -> LessonTutor:
        lesson: Lesson = self.catalog.get_lesson(lesson_id)
        return LessonTutor(lesson, self.ai_client, temperature=self.settings.ai.tutor_temperature)


def build_app(
    settings: Optional[Settings] = None,
    ai_client: Optional[AIClient] = None,
    datastore: Optional[DataStore] = None,
    storage: Optional[ObjectStorage] = None,
) -> LMSApp:
    """Wire the application; any collaborator may be supplied to override config."""
    settings = settings or get_config()

    ai_client = ai_client or AIClient(settings.ai)
    datastore = datastore or create_data_store(settings.datastore)
    storage = storage or create_object_storage(settings.storage)
    session = SessionStore(datastore)

    app = LMSApp(
        settings=settings,
        ai_client=ai_client,
        datastore=datastore,
        storage=storage,
        session=session,
        catalog=LessonCatalog(datastore),
        hints=HintMediator(ai_client, temperature=settings.ai.hint_temperature),
        recorder=SubmissionRecorder(storage, datastore),
        gradebook=Gradebook(datastore, session),
    )
    logger.info(f"LMS core ready (environment={settings.environment})")
    return app
