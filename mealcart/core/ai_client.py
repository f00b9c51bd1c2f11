import asyncio
import logging
from typing import Optional
from datetime import datetime, timezone
from google import genai
from google.genai import types

from ..settings import settings

logger = logging.getLogger("mealcart.ai")


class AIClient:
    """Thin async wrapper around Gemini for one-line answers (a category, a unit list)."""

    _instance = None

    def __init__(self):
        self.api_key = settings.gemini_api_key
        self.mode = settings.ai_mode  # "mock" or "gemini"
        self.model_id = settings.gemini_text_model
        self._client: Optional[genai.Client] = None
        self.last_error: Optional[str] = None
        self.last_error_at: Optional[datetime] = None

        if self.mode == "gemini" and self.api_key:
            self._client = genai.Client(api_key=self.api_key)
        elif self.mode == "gemini":
            logger.warning("AI_MODE=gemini but GEMINI_API_KEY is not set; using keyword fallbacks")

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def is_available(self) -> bool:
        return self.mode == "gemini" and self._client is not None

    def _record_error(self, exc: BaseException):
        self.last_error = f"{exc.__class__.__name__}: {exc}"
        self.last_error_at = datetime.now(timezone.utc)

    async def generate_text(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        max_output_tokens: int = 50,
        temperature: float = 0.1,
    ) -> Optional[str]:
        """
        Short plain-text answer from Gemini.
        Returns None when AI is off, times out, fails or answers with nothing;
        callers treat None as "use the heuristic".
        """
        if not self.is_available():
            return None

        config = types.GenerateContentConfig(
            response_mime_type="text/plain",
            system_instruction=system_instruction,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
        )

        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self.model_id,
                    contents=prompt,
                    config=config,
                ),
                timeout=settings.ai_timeout_sec,
            )
        except Exception as e:
            self._record_error(e)
            logger.error("Gemini text generation failed: %s", self.last_error)
            return None

        text = (response.text or "").strip()
        if not text:
            logger.warning("Gemini returned an empty answer for %r", prompt)
            return None
        return text


# Singleton instance access
ai_client = AIClient.get_instance()
