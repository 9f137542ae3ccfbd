"""Local service provider search route."""

from typing import Optional

from fastapi import APIRouter, Query, Request

from backend.models import ProviderModel, ProviderSearchResponse
from backend.services.places import find_local_providers

router = APIRouter()


@router.get("/providers", response_model=ProviderSearchResponse)
async def search_providers(
    http_request: Request,
    query: str = Query(..., min_length=1, max_length=200, description='Service type, e.g. "plumber"'),
    location: Optional[str] = Query(None, max_length=200),
):
    """Search the local provider directory for a type of service."""
    location = location or http_request.app.state.settings.default_location
    providers = await find_local_providers(query, location)
    return ProviderSearchResponse(
        query=query,
        location=location,
        providers=[ProviderModel(**p.to_dict()) for p in providers],
        total=len(providers),
    )
