"""AI client utility for LMS Core."""

import logging
from typing import Optional
from openai import OpenAI

from config.settings import AIConfig, get_ai_config
from services.errors import TextGenerationError

logger = logging.getLogger(__name__)


class AIClient:
    """Wrapper for text generation (OpenAI chat completions)."""

    def __init__(self, config: Optional[AIConfig] = None, client=None):
        """Initialize AI client based on configuration.

        `client` may be any object exposing `chat.completions.create`; when
        omitted an OpenAI client is built from the configured API key.
        """
        self.config = config or get_ai_config()
        self.client = client

        if self.client is not None:
            return

        if self.config.openai_api_key:
            try:
                self.client = OpenAI(api_key=self.config.openai_api_key)
                logger.info(f"Initialized OpenAI client (model={self.config.openai_model})")
            except Exception as e:
                logger.error(f"Failed to initialize OpenAI client: {e}")
        else:
            logger.warning("OpenAI API key not set — AI hints and tutor will use fallback text.")

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    # ------------------------------------------------------------------
    # GENERIC TEXT GENERATION
    # ------------------------------------------------------------------
    def complete(
        self,
        system_instruction: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Generate text for a prompt under a fixed system instruction.

        Raises TextGenerationError when unconfigured, when the API call fails,
        or when the reply is empty.
        """
        if not self.client:
            raise TextGenerationError("AI client is not configured.")

        if temperature is None:
            temperature = self.config.tutor_temperature

        try:
            response = self.client.chat.completions.create(
                model=self.config.openai_model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens or self.config.max_tokens,
            )
            content = str(response.choices[0].message.content or "").strip()
        except Exception as e:
            logger.error(f"AI text generation failed: {e}")
            raise TextGenerationError(str(e)) from e

        if not content:
            raise TextGenerationError("AI returned an empty response.")
        return content
