"""
Hotel scoring engine.

Ranks catalog hotels against a set of selected points of interest using a
weighted blend of four factors:

* **distance**   – proximity to the centroid of the selected spots
* **centrality** – mean proximity to every individual spot
* **rating**     – ``rating / 5``
* **price**      – linear falloff from 1 at 1000 down to 0 at 2000

Distances are planar: Euclidean distance on raw latitude/longitude degrees,
not great-circle distance. The ``* 100`` scale inside the proximity transform
is the same factor the presentation layer uses to show the distance as km.

The engine is a pure function. It reads only its arguments and returns a
fresh list, so it can be called from any thread without coordination.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from operator import attrgetter

from .models import FilterConfig, Hotel, PointOfInterest, ScoredRecommendation

MAX_RECOMMENDATIONS = 5
DISTANCE_SCALE = 100
PRICE_PIVOT = 1000

SCORING_WEIGHTS: dict[str, float] = {
    "distance": 0.3,
    "centrality": 0.3,
    "rating": 0.2,
    "price": 0.2,
}


class InvalidInputError(ValueError):
    """Raised when a recommendation request cannot be scored at all."""


def planar_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    return math.sqrt((lat1 - lat2) ** 2 + (lng1 - lng2) ** 2)


def proximity_score(distance: float) -> float:
    """Map a planar distance onto (0, 1]; exactly 1 at distance 0."""
    return 1 / (1 + distance * DISTANCE_SCALE)


def compute_centroid(spots: Sequence[PointOfInterest]) -> tuple[float, float]:
    """Arithmetic mean of latitudes and longitudes, in input order."""
    if not spots:
        raise InvalidInputError("At least one point of interest must be selected")
    lat = sum(spot.lat for spot in spots) / len(spots)
    lng = sum(spot.lng for spot in spots) / len(spots)
    return lat, lng


def filter_hotels(catalog: Iterable[Hotel], filter_config: FilterConfig) -> list[Hotel]:
    """Keep hotels inside the price window and above the rating floor, in catalog order."""
    return [hotel for hotel in catalog if filter_config.accepts(hotel)]


def price_score(price: float) -> float:
    # ScoredRecommendation.price_score is bounded to [0, 1]: prices at or under the
    # pivot all score 1, prices at twice the pivot or more score 0.
    return min(1.0, max(0.0, 1 - (price - PRICE_PIVOT) / PRICE_PIVOT))


def score_hotel(
    hotel: Hotel,
    spots: Sequence[PointOfInterest],
    centroid: tuple[float, float],
) -> ScoredRecommendation:
    centroid_lat, centroid_lng = centroid

    distance = planar_distance(hotel.lat, hotel.lng, centroid_lat, centroid_lng)
    distance_score = proximity_score(distance)

    centrality_score = sum(
        proximity_score(planar_distance(hotel.lat, hotel.lng, spot.lat, spot.lng))
        for spot in spots
    ) / len(spots)

    rating_score = hotel.rating / 5
    value_score = price_score(hotel.price)

    w = SCORING_WEIGHTS
    score = (
        distance_score * w["distance"]
        + centrality_score * w["centrality"]
        + rating_score * w["rating"]
        + value_score * w["price"]
    )

    return ScoredRecommendation(
        hotel=hotel,
        score=score,
        planar_distance=distance,
        distance_score=distance_score,
        centrality_score=centrality_score,
        rating_score=rating_score,
        price_score=value_score,
    )


def recommend_hotels(
    selected_spots: Sequence[PointOfInterest],
    catalog: Iterable[Hotel],
    filter_config: FilterConfig,
    limit: int = MAX_RECOMMENDATIONS,
) -> list[ScoredRecommendation]:
    """
    Score and rank hotels for the given selection of spots.

    Returns at most ``limit`` recommendations ordered by score, best first.
    Hotels with equal scores keep their catalog order. An empty list is
    returned when no hotel passes the filter.

    Raises ``InvalidInputError`` when ``selected_spots`` is empty.
    """
    spots = list(selected_spots)
    centroid = compute_centroid(spots)

    scored = [score_hotel(hotel, spots, centroid) for hotel in filter_hotels(catalog, filter_config)]

    # sorted() is stable, including with reverse=True
    ranked = sorted(scored, key=attrgetter("score"), reverse=True)
    return ranked[:limit]
