"""HomeCalc Pro Backend: FastAPI application entry point."""

import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import Settings
from backend.middleware.rate_limit import RateLimitMiddleware
from backend.routes import ai, calculators, chatbot, providers

load_dotenv()

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API application; settings default to the environment."""
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="HomeCalc Pro API",
        description="Home improvement, HVAC, gardening and finance calculators with AI assistance",
        version="0.1.0",
    )
    app.state.settings = settings

    # CORS: configured frontend plus any localhost port
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url] if settings.frontend_url else [],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.requests_per_minute,
        ai_requests_per_minute=settings.ai_requests_per_minute,
    )

    app.include_router(calculators.router, prefix="/api", tags=["Calculators"])
    app.include_router(ai.router, prefix="/api", tags=["AI"])
    app.include_router(chatbot.router, prefix="/api", tags=["AI"])
    app.include_router(providers.router, prefix="/api", tags=["Providers"])

    @app.get("/api/health")
    async def health_check():
        return {"status": "healthy", "service": "homecalc-backend"}

    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY is not set; AI routes will return 500")

    return app


app = create_app()
