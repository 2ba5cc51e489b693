"""
Gemini (Google) chat helper via google.genai (new SDK).
Uses CHAT_MODEL_NAME and GEMINI_API_KEY. One call per request: no retries.
"""
import logging
import time

from quizora.config import settings
from quizora.llm.prompts import CHAT_SYSTEM

logger = logging.getLogger(__name__)

_MODEL_ROLES = frozenset({"assistant", "model"})


def to_gemini_contents(message: str, history: list, max_turns: int = 5) -> list:
    """Last max_turns history turns plus the new message, as google.genai Content objects.
    assistant/model map to "model"; every other role is "user"."""
    from google.genai import types
    recent = list(history or [])[-max_turns:] if max_turns > 0 else []
    contents = [
        types.Content(
            role="model" if (turn.role or "").lower() in _MODEL_ROLES else "user",
            parts=[types.Part(text=turn.text)],
        )
        for turn in recent
    ]
    contents.append(types.Content(role="user", parts=[types.Part(text=message)]))
    return contents


class GeminiChatService:
    """Google Gemini implementation via google.genai SDK (generate_content).
    The client is built on the first reply(), so SDK or key problems surface as reply errors."""

    def __init__(self, model_name: str | None = None, api_key: str | None = None, temperature: float | None = None) -> None:
        self._api_key = (api_key if api_key is not None else settings.gemini_api_key or "").strip()
        self._client = None
        self._model_name = (model_name or settings.chat_model_name).strip()
        self._temperature = settings.chat_temperature if temperature is None else temperature

    @property
    def model_name(self) -> str:
        return self._model_name

    def _get_client(self):
        if not self._api_key:
            raise RuntimeError("GEMINI_API_KEY is not set")
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def reply(self, message: str, history: list) -> str:
        client = self._get_client()
        from google.genai import types
        config = types.GenerateContentConfig(
            system_instruction=CHAT_SYSTEM,
            temperature=self._temperature,
        )
        t_start = time.perf_counter()
        response = client.models.generate_content(
            model=self._model_name,
            contents=to_gemini_contents(message, history, settings.chat_history_turns),
            config=config,
        )
        logger.info("Gemini chat reply in %.2fs (model=%s)", time.perf_counter() - t_start, self._model_name)
        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise RuntimeError("Gemini returned an empty reply")
        return text
