"""The three Claude-backed flows: assist, recommendations and chatbot.

Each flow builds its prompt, calls the Messages API and post-processes the
output against the calculator catalog. Provider errors and unusable model
output are raised as AIFlowError; routes translate that into a 502.
"""

import json
import logging
from typing import Optional
from urllib.parse import quote_plus

import anthropic
from anthropic import AsyncAnthropic

from backend.ai.client import extract_text, parse_json_response
from backend.ai.prompts import (
    AI_ASSIST_SYSTEM,
    FIND_PROVIDERS_TOOL,
    build_assist_messages,
    build_chatbot_messages,
    build_chatbot_system,
    build_recommend_messages,
    build_recommend_system,
)
from backend.config import DEFAULT_MODEL
from backend.models import (
    AiAssistRequest,
    AiAssistResponse,
    CalculatorInfo,
    ChatbotRequest,
    ChatbotResponse,
    ProviderModel,
    RecommendRequest,
    RecommendResponse,
)
from backend.services.places import find_local_providers
from engine.catalog import get_calculator, get_calculator_by_name

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "I'm sorry, I couldn't generate a response. Please try again."
PROVIDERS_ANSWER = "I found some professionals for you. Here is a link to view them on Google Maps."
SERVICE_KEYWORDS = ["plumber", "painter", "electrician", "contractor", "hvac"]
MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="


class AIFlowError(Exception):
    """Raised when the model call fails or its output cannot be used."""


async def _create(client: AsyncAnthropic, **kwargs):
    try:
        return await client.messages.create(**kwargs)
    except anthropic.APIError as e:
        raise AIFlowError(f"Anthropic API error: {e}") from e


# --- AI-assisted calculations ---

async def ai_assisted_calculations(
    client: AsyncAnthropic,
    request: AiAssistRequest,
    model: str = DEFAULT_MODEL,
) -> AiAssistResponse:
    """Suggest values for the blank fields of a calculator form."""
    units = request.units.value if request.units else None
    messages = build_assist_messages(request.calculator_type, request.parameters, units)

    response = await _create(
        client,
        model=model,
        max_tokens=1000,
        system=AI_ASSIST_SYSTEM,
        messages=messages,
    )

    try:
        parsed = parse_json_response(extract_text(response))
    except json.JSONDecodeError as e:
        raise AIFlowError(f"Could not parse assist output: {e}") from e

    values = None
    raw_values = parsed.get("auto_calculated_values")
    if isinstance(raw_values, dict):
        dropped = [key for key in raw_values if key not in request.parameters]
        if dropped:
            logger.warning("Dropping suggestions for unknown fields: %s", ", ".join(dropped))
        # Only fields the form actually has; booleans are not valid suggestions
        values = {
            key: value for key, value in raw_values.items()
            if key in request.parameters
            and isinstance(value, (int, float, str))
            and not isinstance(value, bool)
        }

    hints = parsed.get("hints_and_next_steps")
    if not isinstance(hints, str) or not hints.strip():
        hints = None

    logger.info(
        "AI assist for %s: %d suggested values",
        request.calculator_type, len(values or {}),
    )
    return AiAssistResponse(auto_calculated_values=values, hints_and_next_steps=hints)


# --- Calculator recommendations ---

async def recommend_calculators(
    client: AsyncAnthropic,
    request: RecommendRequest,
    model: str = DEFAULT_MODEL,
) -> RecommendResponse:
    """Recommend catalog calculators based on a description of past activity."""
    response = await _create(
        client,
        model=model,
        max_tokens=500,
        system=build_recommend_system(),
        messages=build_recommend_messages(request.past_activity),
    )

    try:
        parsed = parse_json_response(extract_text(response))
    except json.JSONDecodeError as e:
        raise AIFlowError(f"Could not parse recommendations: {e}") from e

    names = parsed.get("recommendations") or []
    if not isinstance(names, list):
        raise AIFlowError("Recommendations output is not a list")

    recommendations: list[str] = []
    calculators: list[CalculatorInfo] = []
    for name in names:
        if not isinstance(name, str) or name in recommendations:
            continue
        calc = get_calculator_by_name(name)
        if calc is None:
            logger.warning("Dropping unknown calculator name %r", name)
            continue
        recommendations.append(calc.name)
        calculators.append(CalculatorInfo.from_calculator(calc))

    return RecommendResponse(recommendations=recommendations, calculators=calculators)


# --- Chatbot ---

def maps_link(query: str) -> str:
    """Google Maps search link for the first word of the query that names a service."""
    keyword = next((w for w in query.lower().split() if w in SERVICE_KEYWORDS), "home service")
    return MAPS_SEARCH_URL + quote_plus(keyword)


def _clean_link(link) -> Optional[str]:
    if not isinstance(link, str) or not link.strip():
        return None
    link = link.strip()
    if link.startswith("/calculators/"):
        slug = link[len("/calculators/"):].strip("/")
        if get_calculator(slug) is None:
            logger.warning("Dropping link to unknown calculator %r", slug)
            return None
    return link


async def chatbot(
    client: AsyncAnthropic,
    request: ChatbotRequest,
    model: str = DEFAULT_MODEL,
    default_location: str = "Anytown, USA",
) -> ChatbotResponse:
    """Answer a HomeCalc Helper chat turn, looking up local providers on request."""
    history = [turn.model_dump() for turn in request.history]
    response = await _create(
        client,
        model=model,
        max_tokens=1500,
        system=build_chatbot_system(),
        messages=build_chatbot_messages(request.query, history),
        tools=[FIND_PROVIDERS_TOOL],
    )

    tool_use = next(
        (
            block for block in response.content
            if getattr(block, "type", None) == "tool_use"
            and block.name == FIND_PROVIDERS_TOOL["name"]
        ),
        None,
    )
    if tool_use is not None:
        service = (tool_use.input or {}).get("query") or request.query
        location = request.user_location or default_location
        providers = await find_local_providers(service, location)
        return ChatbotResponse(
            answer=PROVIDERS_ANSWER,
            link=maps_link(request.query),
            providers=[ProviderModel(**p.to_dict()) for p in providers],
        )

    try:
        parsed = parse_json_response(extract_text(response))
    except json.JSONDecodeError:
        logger.warning("Chatbot output was not valid JSON")
        return ChatbotResponse(answer=FALLBACK_ANSWER)

    answer = parsed.get("answer")
    if not isinstance(answer, str) or not answer.strip():
        return ChatbotResponse(answer=FALLBACK_ANSWER)

    return ChatbotResponse(answer=answer.strip(), link=_clean_link(parsed.get("link")))
