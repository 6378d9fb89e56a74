from __future__ import annotations

import time

from ..analytics.store import record_event
from .analysis import build_analysis, build_reasons, display_distance_km
from .cache import cache_response, get_cached_response
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .data_store import get_hotels, lookup_spots
from .engine import InvalidInputError, compute_centroid, filter_hotels, recommend_hotels
from .models import (
    Centroid,
    RecommendationItem,
    RecommendationRequest,
    RecommendationResponse,
)


def _unique_in_order(ids: list[int]) -> list[int]:
    seen: set[int] = set()
    unique: list[int] = []
    for sid in ids:
        if sid not in seen:
            seen.add(sid)
            unique.append(sid)
    return unique


def _record_search(
    request: RecommendationRequest,
    response: RecommendationResponse,
    start_time: float,
    cache_hit: bool,
) -> None:
    elapsed_ms = round((time.perf_counter() - start_time) * 1000, 3)
    record_event("search", {
        "spot_ids": request.spot_ids,
        "spot_names": response.analysis.spot_names,
        "min_price": request.min_price,
        "max_price": request.max_price,
        "min_rating": request.min_rating,
        "total_candidates": response.total_candidates,
        "results_returned": len(response.recommendations),
        "top_hotel_id": (
            response.recommendations[0].hotel.id if response.recommendations else None
        ),
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })


def get_recommendations(
    request: RecommendationRequest,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RecommendationResponse:
    """
    Run the scoring engine for an API request.

    Raises ``InvalidInputError`` when fewer spots than ``config.min_selected_spots``
    are selected, and ``UnknownSpotError`` when an id is not in the catalog.
    """
    start_time = time.perf_counter()

    spot_ids = _unique_in_order(request.spot_ids)
    if len(spot_ids) < max(1, config.min_selected_spots):
        raise InvalidInputError(
            f"Select at least {max(1, config.min_selected_spots)} tourist spot(s); "
            f"got {len(spot_ids)}"
        )
    request = request.model_copy(update={"spot_ids": spot_ids})

    # --- Cache check ---
    cached = get_cached_response(request)
    if cached is not None:
        _record_search(request, cached, start_time, cache_hit=True)
        return cached

    spots = lookup_spots(spot_ids)
    catalog = get_hotels()
    filter_config = request.to_filter()

    # --- Scoring ---
    ranked = recommend_hotels(spots, catalog, filter_config)
    centroid_lat, centroid_lng = compute_centroid(spots)
    total_candidates = len(filter_hotels(catalog, filter_config))

    # --- Assemble response ---
    items = [
        RecommendationItem(
            rank=position,
            hotel=rec.hotel,
            score=rec.score,
            planar_distance=rec.planar_distance,
            display_distance_km=display_distance_km(rec.planar_distance),
            distance_score=rec.distance_score,
            centrality_score=rec.centrality_score,
            rating_score=rec.rating_score,
            price_score=rec.price_score,
            reasons=build_reasons(rec),
        )
        for position, rec in enumerate(ranked, start=1)
    ]

    response = RecommendationResponse(
        recommendations=items,
        total_candidates=total_candidates,
        centroid=Centroid(lat=centroid_lat, lng=centroid_lng),
        analysis=build_analysis(spots, filter_config),
    )

    cache_response(request, response)
    _record_search(request, response, start_time, cache_hit=False)

    return response
