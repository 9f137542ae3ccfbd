"""
Mock local service provider lookup.

Stands in for a places search API (e.g. Google Places text search) with
hard-coded fixtures so the chatbot can demonstrate provider recommendations
without an external dependency or API key.

Usage:
    providers = await find_local_providers("plumber", "Austin, TX")
"""

import logging
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Provider:
    name: str
    rating: float
    user_ratings_total: int
    vicinity: str  # street address

    def to_dict(self) -> dict:
        return asdict(self)


# Checked in order; the first keyword contained in the query wins
_FIXTURES: list[tuple[str, list[Provider]]] = [
    ("plumber", [
        Provider("Pipe Masters Plumbing", 4.8, 152, "123 Main St, Anytown"),
        Provider("Reliable Rooter", 4.6, 210, "456 Oak Ave, Anytown"),
        Provider("The Tidy Toilet", 4.9, 88, "789 Pine Ln, Anytown"),
    ]),
    ("painter", [
        Provider("Precision Painting Co.", 4.9, 301, "321 Canvas Rd, Anytown"),
        Provider("Fresh Coat Painters", 4.7, 189, "654 Brush Blvd, Anytown"),
    ]),
    ("electrician", [
        Provider("Sparky & Sons Electric", 4.8, 450, "111 Volt Ct, Anytown"),
        Provider("Watt's Up Electricians", 4.5, 123, "222 Amp Way, Anytown"),
    ]),
]


async def find_local_providers(query: str, location: str) -> list[Provider]:
    """Return fixture providers whose service keyword appears in the query.

    Matching is a case-insensitive substring test; unknown services return
    an empty list. The location is logged but does not affect the fixtures.
    """
    logger.info("Searching for '%s' near '%s'", query, location)

    needle = query.lower()
    for keyword, providers in _FIXTURES:
        if keyword in needle:
            return list(providers)

    return []
