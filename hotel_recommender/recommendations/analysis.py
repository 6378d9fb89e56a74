from __future__ import annotations

from collections.abc import Sequence

from .engine import DISTANCE_SCALE, SCORING_WEIGHTS
from .models import (
    FilterConfig,
    PointOfInterest,
    RecommendationAnalysis,
    ScoredRecommendation,
    ScoringFactor,
)

FACTOR_LABELS: dict[str, str] = {
    "distance": "Distance to spots",
    "centrality": "Centrality to all spots",
    "rating": "Hotel rating",
    "price": "Price value",
}


def _format_number(value: float) -> str:
    return f"{value:g}"


def display_distance_km(planar_distance: float) -> float:
    """Planar degree distance as the web client labels it (not a true km figure)."""
    return planar_distance * DISTANCE_SCALE


def min_rating_label(min_rating: float) -> str:
    return "Any" if min_rating == 0 else f"{_format_number(min_rating)}+"


def scoring_factors() -> list[ScoringFactor]:
    return [
        ScoringFactor(name=name, label=FACTOR_LABELS[name], weight=weight)
        for name, weight in SCORING_WEIGHTS.items()
    ]


def build_reasons(rec: ScoredRecommendation) -> list[str]:
    """Short "why choose this hotel" lines shown next to each card."""
    hotel = rec.hotel
    return [
        "Perfectly located near your selected spots",
        f"High rating of {_format_number(hotel.rating)}/5 stars",
        f"Great value at ₹{_format_number(hotel.price)}/night",
        f"{rec.score * 100:.1f}% match score",
    ]


def build_analysis(
    spots: Sequence[PointOfInterest],
    filter_config: FilterConfig,
) -> RecommendationAnalysis:
    return RecommendationAnalysis(
        selected_spots=len(spots),
        spot_names=[spot.name for spot in spots],
        price_range=(filter_config.min_price, filter_config.max_price),
        min_rating_label=min_rating_label(filter_config.min_rating),
        scoring_factors=scoring_factors(),
    )
