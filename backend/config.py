"""Runtime settings read from the environment (.env is loaded by backend.main)."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


@dataclass
class Settings:
    anthropic_api_key: Optional[str] = None
    ai_model: str = DEFAULT_MODEL
    frontend_url: Optional[str] = None
    requests_per_minute: int = 60
    ai_requests_per_minute: int = 10
    default_location: str = "Anytown, USA"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            ai_model=os.getenv("HOMECALC_AI_MODEL", DEFAULT_MODEL),
            frontend_url=os.getenv("FRONTEND_URL") or None,
            requests_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "60")),
            ai_requests_per_minute=int(os.getenv("AI_RATE_LIMIT_PER_MINUTE", "10")),
            default_location=os.getenv("DEFAULT_LOCATION", "Anytown, USA"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
