"""AI hints for quiz questions, with static fallbacks."""

import logging
from typing import Optional

from services.errors import TextGenerationError

logger = logging.getLogger(__name__)

HINT_INSTRUCTION = "Provide a subtle hint for the multiple-choice question. Do not reveal the answer."

UNCONFIGURED_HINT = "Think carefully about the key concepts from the lesson content!"
FAILED_HINT = "Think about the main concepts we discussed in the last lesson!"


class HintMediator:
    """Forwards the current question to the text generator and returns its hint.

    Each request is independent; hints are neither cached nor retried.
    """

    def __init__(self, generator, temperature: Optional[float] = 0.9):
        self.generator = generator
        self.temperature = temperature

    def request_hint(self, question_prompt: str) -> str:
        if self.generator is None or not self.generator.is_configured:
            logger.warning("Text generation not configured; returning static hint.")
            return UNCONFIGURED_HINT

        prompt = f'Help the student solve this quiz question without giving the direct answer: "{question_prompt}"'
        try:
            return self.generator.complete(HINT_INSTRUCTION, prompt, temperature=self.temperature)
        except TextGenerationError as e:
            logger.warning(f"Hint generation failed, using fallback: {e}")
            return FAILED_HINT
