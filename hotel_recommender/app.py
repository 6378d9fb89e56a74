from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .enrichment.config import DEFAULT_ENRICHMENT_CONFIG
from .enrichment.images import get_hotel_images
from .enrichment.routing import fetch_route
from .enrichment.travel import TravelOptions, travel_options
from .enrichment.weather import get_weather_by_city
from .recommendations.analysis import scoring_factors
from .recommendations.cache import get_cache_stats
from .recommendations.config import DEFAULT_RECOMMENDATION_CONFIG
from .recommendations.data_store import (
    UnknownSpotError,
    get_hotel,
    get_hotels,
    get_spot,
    get_spots,
)
from .recommendations.engine import InvalidInputError
from .recommendations.models import (
    Hotel,
    PointOfInterest,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.retrieval import get_recommendations

app = FastAPI(title="Munnar Hotel Recommendation API", version="1.0.0")


def _hotel_or_404(hotel_id: int) -> Hotel:
    hotel = get_hotel(hotel_id)
    if hotel is None:
        raise HTTPException(status_code=404, detail=f"Hotel {hotel_id} not found")
    return hotel


def _spot_or_404(spot_id: int) -> PointOfInterest:
    spot = get_spot(spot_id)
    if spot is None:
        raise HTTPException(status_code=404, detail=f"Tourist spot {spot_id} not found")
    return spot


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    hotels = get_hotels()
    prices = [h.price for h in hotels]
    cfg = DEFAULT_RECOMMENDATION_CONFIG
    return {
        "spots": [s.model_dump() for s in get_spots()],
        "price_bounds": {
            "min": min(prices) if prices else 0.0,
            "max": max(prices) if prices else 0.0,
        },
        "default_price_range": list(cfg.default_price_range),
        "rating_options": list(cfg.rating_options),
        "min_selected_spots": cfg.min_selected_spots,
        "scoring_factors": [f.model_dump() for f in scoring_factors()],
    }


@app.get("/spots", response_model=list[PointOfInterest])
def spots() -> list[PointOfInterest]:
    return list(get_spots())


@app.get("/hotels", response_model=list[Hotel])
def hotels() -> list[Hotel]:
    return list(get_hotels())


@app.get("/hotels/{hotel_id}", response_model=Hotel)
def hotel_detail(hotel_id: int) -> Hotel:
    return _hotel_or_404(hotel_id)


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    try:
        return get_recommendations(body)
    except InvalidInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except UnknownSpotError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


# ── Enrichment endpoints ─────────────────────────────────────────────────
# These never fail because a third-party service is down; they return an
# empty or placeholder value instead.


@app.get("/hotels/{hotel_id}/images")
def hotel_images(hotel_id: int, count: int = Query(default=3, ge=1, le=10)) -> dict:
    hotel = _hotel_or_404(hotel_id)
    return {"hotel_id": hotel.id, "images": get_hotel_images(hotel, count=count)}


@app.get("/hotels/{hotel_id}/travel", response_model=TravelOptions)
def hotel_travel(hotel_id: int, spot_id: int) -> TravelOptions:
    hotel = _hotel_or_404(hotel_id)
    spot = _spot_or_404(spot_id)
    return travel_options((spot.lat, spot.lng), (hotel.lat, hotel.lng))


@app.get("/hotels/{hotel_id}/route")
def hotel_route(hotel_id: int, spot_id: int) -> dict:
    hotel = _hotel_or_404(hotel_id)
    spot = _spot_or_404(spot_id)
    route = fetch_route((spot.lat, spot.lng), (hotel.lat, hotel.lng))
    return {
        "hotel_id": hotel.id,
        "spot_id": spot.id,
        "route": route.model_dump() if route else None,
    }


@app.get("/weather")
def weather(city: str | None = None) -> dict:
    city = city or DEFAULT_ENRICHMENT_CONFIG.default_city
    snapshot = get_weather_by_city(city)
    return {"city": city, "weather": snapshot.model_dump() if snapshot else None}


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
