from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel

from .config import DEFAULT_ENRICHMENT_CONFIG, EnrichmentConfig

logger = logging.getLogger(__name__)


class WeatherSnapshot(BaseModel):
    city: str
    description: str
    temperature_c: float | None = None
    humidity: float | None = None
    wind_speed_ms: float | None = None


def _parse_weather(payload: dict, fallback_city: str) -> WeatherSnapshot:
    conditions = payload.get("weather") or [{}]
    main = payload.get("main") or {}
    wind = payload.get("wind") or {}
    return WeatherSnapshot(
        city=payload.get("name") or fallback_city,
        description=str(conditions[0].get("description", "")),
        temperature_c=main.get("temp"),
        humidity=main.get("humidity"),
        wind_speed_ms=wind.get("speed"),
    )


def get_weather_by_city(
    city: str | None = None,
    config: EnrichmentConfig = DEFAULT_ENRICHMENT_CONFIG,
) -> WeatherSnapshot | None:
    """
    Fetch current weather for ``city`` in metric units.

    Returns ``None`` when weather is disabled, no API key is configured,
    or the request fails for any reason.
    """
    city = city or config.default_city
    if not config.enabled or not config.openweather_api_key:
        return None

    try:
        with httpx.Client(timeout=config.timeout) as client:
            response = client.get(
                config.openweather_url,
                params={"q": city, "appid": config.openweather_api_key, "units": "metric"},
            )
            response.raise_for_status()
        return _parse_weather(response.json(), city)

    except Exception:
        logger.warning("Weather lookup for %s failed, omitting weather", city, exc_info=True)
        return None
