"""AI study assistant answering questions about one lesson."""

import logging
from typing import List, Optional

from config.models import ChatMessage, ChatRole, Lesson
from services.errors import TextGenerationError

logger = logging.getLogger(__name__)

TUTOR_INSTRUCTION = (
    "You are a helpful and encouraging LMS AI Tutor. Use the provided lesson context to "
    "explain concepts clearly. If the question is outside the scope of the lesson, politely "
    "inform the student but offer a brief general answer."
)

UNCONFIGURED_REPLY = (
    "AI Study Assistant is currently not configured. "
    "Please add an API key to your environment variables."
)
FAILED_REPLY = "I'm sorry, I'm having trouble connecting to my brain right now. Please try again in a moment!"


class LessonTutor:
    """Chat over a lesson's content; keeps the conversation history."""

    def __init__(self, lesson: Lesson, generator, temperature: Optional[float] = 0.7):
        self.lesson = lesson
        self.generator = generator
        self.temperature = temperature
        self.history: List[ChatMessage] = []

    def ask(self, question: str) -> Optional[str]:
        """Append the question and the tutor's reply; blank questions are ignored."""
        if not question or not question.strip():
            return None

        self.history.append(ChatMessage(role=ChatRole.USER, text=question))
        reply = self._explain(question)
        self.history.append(ChatMessage(role=ChatRole.AI, text=reply))
        return reply

    def _explain(self, question: str) -> str:
        if self.generator is None or not self.generator.is_configured:
            logger.warning("Text generation not configured; tutor returns static reply.")
            return UNCONFIGURED_REPLY

        prompt = f"Context: {self.lesson.content}\n\nStudent Question: {question}"
        try:
            return self.generator.complete(TUTOR_INSTRUCTION, prompt, temperature=self.temperature)
        except TextGenerationError as e:
            logger.error(f"Tutor generation failed: {e}")
            return FAILED_REPLY
