import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException

from finassist.config import Settings
from finassist.dependencies import get_chatbot_service, get_settings
from finassist.models.schemas import ChatRequest, ChatResponse, HealthResponse
from finassist.services.chatbot import ChatbotService
from finassist.services.replies import FallbackReply

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest, chatbot: ChatbotService = Depends(get_chatbot_service)):
    if not payload.message or not payload.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    logger.info(f"📨 User Message: {payload.message}")

    try:
        reply = await chatbot.chat(
            payload.message,
            history=payload.conversation_history,
            snapshot=payload.financial_data,
        )
    except Exception as e:
        logger.error(f"AI Generation Error: {e}")
        raise HTTPException(status_code=500, detail="Failed to process chat message")

    if isinstance(reply, FallbackReply):
        logger.info("Returning fallback insights")

    return {"message": reply.message, "insights": reply.insights, "timestamp": datetime.now(UTC)}


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)):
    return {"status": "online", "configured": bool(settings.gemini_api_key), "model": settings.gemini_model}
