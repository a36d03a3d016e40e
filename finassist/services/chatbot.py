import logging
from collections.abc import Sequence

import google.generativeai as genai

from finassist.models.schemas import ChatMessage, FinancialSnapshot
from finassist.services.prompts import build_prompt
from finassist.services.replies import AssistantReply, parse_reply

logger = logging.getLogger(__name__)


def build_model(api_key: str, model_name: str) -> genai.GenerativeModel:
    genai.configure(api_key=api_key)
    return genai.GenerativeModel(model_name)


class ChatbotService:
    def __init__(self, model, model_name: str):
        self.model = model
        self.model_name = model_name

    async def chat(
        self,
        message: str,
        history: Sequence[ChatMessage] | None = None,
        snapshot: FinancialSnapshot | None = None,
    ) -> AssistantReply:
        """
        Sends one user message (with optional context) to the model and normalizes the answer.
        Errors raised by the model call itself propagate to the caller.
        """
        prompt = build_prompt(message, snapshot=snapshot, history=history)

        response = await self.model.generate_content_async(prompt)

        # Blocked or empty candidates make `.text` raise; treat them as an empty answer
        try:
            raw_text = response.text
        except ValueError as e:
            logger.warning(f"Model returned no text: {e}")
            raw_text = ""

        logger.info(f"🤖 AI Response: {raw_text}")
        return parse_reply(raw_text)
