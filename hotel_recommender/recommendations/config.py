from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RecommendationConfig:
    # The web client asks for at least 5 spots; the API itself accepts any non-empty selection.
    min_selected_spots: int = int(os.getenv("MIN_SELECTED_SPOTS", "1"))
    default_price_range: tuple[float, float] = (1500.0, 6000.0)
    default_min_rating: float = 0.0
    rating_options: tuple[float, ...] = (0.0, 3.0, 3.5, 4.0, 4.5)


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
