from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel

from .config import DEFAULT_ENRICHMENT_CONFIG, EnrichmentConfig

logger = logging.getLogger(__name__)


class RouteGeometry(BaseModel):
    """Driving path between two points; coordinates are (lat, lng) pairs."""

    coordinates: list[tuple[float, float]]
    distance_km: float
    duration_minutes: int


def _parse_route(payload: dict) -> RouteGeometry | None:
    if payload.get("code") != "Ok" or not payload.get("routes"):
        return None
    route = payload["routes"][0]
    # GeoJSON orders positions as [lng, lat]
    coordinates = [(float(lat), float(lng)) for lng, lat in route["geometry"]["coordinates"]]
    return RouteGeometry(
        coordinates=coordinates,
        distance_km=float(route.get("distance", 0.0)) / 1000,
        duration_minutes=round(float(route.get("duration", 0.0)) / 60),
    )


def fetch_route(
    origin: tuple[float, float],
    destination: tuple[float, float],
    config: EnrichmentConfig = DEFAULT_ENRICHMENT_CONFIG,
) -> RouteGeometry | None:
    """
    Ask the OSRM routing service for the driving path from ``origin`` to
    ``destination`` (both (lat, lng)).

    Returns ``None`` when routing is disabled, no route exists, or the
    request fails for any reason.
    """
    if not config.enabled:
        return None

    (start_lat, start_lng), (end_lat, end_lng) = origin, destination
    url = (
        f"{config.osrm_url.rstrip('/')}/route/v1/driving/"
        f"{start_lng},{start_lat};{end_lng},{end_lat}"
    )

    try:
        with httpx.Client(timeout=config.timeout) as client:
            response = client.get(url, params={"overview": "full", "geometries": "geojson"})
            response.raise_for_status()
        return _parse_route(response.json())

    except Exception:
        logger.warning("Route lookup %s -> %s failed, omitting route", origin, destination, exc_info=True)
        return None
