"""
Chat helper: POST /chat forwards the message and recent history to Gemini.
Downstream failures are logged and answered with a generic 500.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from quizora.llm import ChatService, get_chat_service
from quizora.schemas.chat import ChatRequest, ChatResponse

router = APIRouter(prefix="/chat", tags=["chat"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ChatResponse)
def chat(data: ChatRequest, service: ChatService = Depends(get_chat_service)):
    message = (data.message or "").strip()
    if not message:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required")
    try:
        reply = service.reply(message, data.history)
    except Exception as e:
        logger.error("Chat helper failed: %s: %s", type(e).__name__, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Chatbot service is currently unavailable",
        )
    return ChatResponse(success=True, reply=reply)
