from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from ..recommendations.models import Hotel
from .config import DEFAULT_ENRICHMENT_CONFIG, EnrichmentConfig

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = "https://via.placeholder.com/400x300/3498db/ffffff?text={text}"


def placeholder_image(hotel_name: str) -> str:
    return PLACEHOLDER_URL.format(text=quote(hotel_name, safe=""))


def fetch_images(
    query: str,
    per_page: int = 5,
    config: EnrichmentConfig = DEFAULT_ENRICHMENT_CONFIG,
) -> list[str]:
    """
    Search Pixabay for photos matching ``query``.

    Returns medium-size image URLs, or an empty list on any failure.
    """
    if not config.enabled or not config.pixabay_api_key:
        return []

    # Pixabay rejects per_page outside 3..200
    per_page = max(3, min(200, per_page))

    try:
        with httpx.Client(timeout=config.timeout) as client:
            response = client.get(
                config.pixabay_url,
                params={
                    "key": config.pixabay_api_key,
                    "q": query,
                    "image_type": "photo",
                    "per_page": per_page,
                },
            )
            response.raise_for_status()
        hits = response.json().get("hits") or []
        return [hit["webformatURL"] for hit in hits if hit.get("webformatURL")]

    except Exception:
        logger.warning("Pixabay image search for %r failed", query, exc_info=True)
        return []


def get_hotel_images(
    hotel: Hotel,
    count: int = 3,
    config: EnrichmentConfig = DEFAULT_ENRICHMENT_CONFIG,
) -> list[str]:
    """Photos for a hotel card; a single placeholder when nothing is found."""
    query = f"{hotel.name} {hotel.location}".strip()
    images = fetch_images(query, per_page=count, config=config)[:count]
    return images or [placeholder_image(hotel.name)]
