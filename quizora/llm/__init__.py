"""
LLM abstraction for the chat helper. Gemini only; one client per process.
"""
import logging
from functools import lru_cache

from quizora.llm.base import ChatService

logger = logging.getLogger(__name__)


@lru_cache
def get_chat_service() -> ChatService:
    """Dependency: process-wide Gemini chat service. A missing key surfaces on the first reply()."""
    from quizora.llm.gemini_impl import GeminiChatService
    service = GeminiChatService()
    logger.info("Chat helper ready (model=%s)", service.model_name)
    return service


__all__ = ["ChatService", "get_chat_service"]
