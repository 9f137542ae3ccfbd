"""AI routes: assisted calculation and calculator recommendations."""

import logging

from anthropic import AsyncAnthropic
from fastapi import APIRouter, Depends, HTTPException, Request

from backend.ai.client import get_client
from backend.ai.flows import AIFlowError, ai_assisted_calculations, recommend_calculators
from backend.models import AiAssistRequest, AiAssistResponse, RecommendRequest, RecommendResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ai/assist", response_model=AiAssistResponse)
async def ai_assist(
    request: AiAssistRequest,
    http_request: Request,
    client: AsyncAnthropic = Depends(get_client),
):
    """Suggest values for the blank fields of a calculator form."""
    settings = http_request.app.state.settings
    try:
        return await ai_assisted_calculations(client, request, model=settings.ai_model)
    except HTTPException:
        raise
    except AIFlowError:
        logger.exception("AI assist failed for %s", request.calculator_type)
        raise HTTPException(status_code=502, detail="Failed to get AI assistance.")


@router.post("/ai/recommendations", response_model=RecommendResponse)
async def ai_recommendations(
    request: RecommendRequest,
    http_request: Request,
    client: AsyncAnthropic = Depends(get_client),
):
    """Recommend calculators from a description of the user's past activity."""
    settings = http_request.app.state.settings
    try:
        return await recommend_calculators(client, request, model=settings.ai_model)
    except HTTPException:
        raise
    except AIFlowError:
        logger.exception("Calculator recommendation failed")
        raise HTTPException(status_code=502, detail="Failed to get AI recommendations.")
