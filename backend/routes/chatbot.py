"""HomeCalc Helper chatbot route."""

import logging

from anthropic import AsyncAnthropic
from fastapi import APIRouter, Depends, HTTPException, Request

from backend.ai.client import get_client
from backend.ai.flows import AIFlowError, chatbot
from backend.models import ChatbotRequest, ChatbotResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chatbot", response_model=ChatbotResponse)
async def chat(
    request: ChatbotRequest,
    http_request: Request,
    client: AsyncAnthropic = Depends(get_client),
):
    """Answer one chat turn, given the prior conversation history."""
    settings = http_request.app.state.settings
    try:
        return await chatbot(
            client,
            request,
            model=settings.ai_model,
            default_location=settings.default_location,
        )
    except HTTPException:
        raise
    except AIFlowError:
        logger.exception("Chatbot turn failed")
        raise HTTPException(status_code=502, detail="Failed to get a chatbot response.")
