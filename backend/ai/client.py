"""Anthropic client dependency and response parsing helpers."""

import json
from typing import Optional

from anthropic import AsyncAnthropic
from fastapi import HTTPException, Request

MISSING_KEY_DETAIL = "ANTHROPIC_API_KEY not configured"

_client: Optional[AsyncAnthropic] = None
_client_key: Optional[str] = None


def get_client(request: Request) -> AsyncAnthropic:
    """FastAPI dependency returning the shared Anthropic client.

    The key comes from the app's Settings. Raises a 500 with a configuration
    message when no key is set.
    """
    global _client, _client_key
    api_key = request.app.state.settings.anthropic_api_key
    if not api_key:
        raise HTTPException(status_code=500, detail=MISSING_KEY_DETAIL)
    if _client is None or _client_key != api_key:
        _client = AsyncAnthropic(api_key=api_key)
        _client_key = api_key
    return _client


def reset_client() -> None:
    """Drop the cached client so the next call builds a new one."""
    global _client, _client_key
    _client = None
    _client_key = None


def extract_text(response) -> str:
    """Concatenate the text blocks of a Messages API response."""
    parts = [
        block.text for block in response.content
        if getattr(block, "type", "text") == "text"
    ]
    return "".join(parts).strip()


def parse_json_response(text: str) -> dict:
    """Parse a JSON object from model output, tolerating markdown code fences.

    Raises json.JSONDecodeError if no JSON object can be recovered.
    """
    response_text = text.strip()
    # Handle potential markdown code blocks
    if response_text.startswith("```"):
        response_text = response_text.split("```")[1]
        if response_text.startswith("json"):
            response_text = response_text[4:]
        response_text = response_text.strip()

    try:
        parsed = json.loads(response_text)
    except json.JSONDecodeError:
        start = response_text.find("{")
        end = response_text.rfind("}")
        if start == -1 or end <= start:
            raise
        parsed = json.loads(response_text[start:end + 1])

    if not isinstance(parsed, dict):
        raise json.JSONDecodeError("Expected a JSON object", response_text, 0)
    return parsed
