from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class EnrichmentConfig:
    openweather_api_key: str = os.getenv("OPENWEATHER_API_KEY", "")
    openweather_url: str = "https://api.openweathermap.org/data/2.5/weather"
    pixabay_api_key: str = os.getenv("PIXABAY_API_KEY", "")
    pixabay_url: str = "https://pixabay.com/api/"
    osrm_url: str = os.getenv("OSRM_URL", "https://router.project-osrm.org")
    default_city: str = os.getenv("DEFAULT_CITY", "Munnar")
    timeout: float = 5.0
    enabled: bool = True


DEFAULT_ENRICHMENT_CONFIG = EnrichmentConfig()
