from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel

TravelMode = Literal["driving", "walking", "transit"]

EARTH_RADIUS_KM = 6371

# Average speeds around Munnar, km/h
AVERAGE_SPEEDS_KMH: dict[str, float] = {
    "driving": 40,
    "walking": 5,
    "transit": 25,
}


class TravelEstimate(BaseModel):
    mode: TravelMode
    distance_km: float
    duration_minutes: int
    distance: str
    duration: str
    steps: list[str]


class TravelOptions(BaseModel):
    driving: TravelEstimate
    walking: TravelEstimate
    transit: TravelEstimate


def direct_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle (haversine) distance in km."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def estimated_travel_minutes(distance_km: float, mode: TravelMode) -> int:
    try:
        speed = AVERAGE_SPEEDS_KMH[mode]
    except KeyError:
        raise ValueError(f"Unknown travel mode: {mode}") from None
    return round(distance_km / speed * 60)


def estimate_route(
    origin: tuple[float, float],
    destination: tuple[float, float],
    mode: TravelMode = "driving",
) -> TravelEstimate:
    distance = direct_distance_km(*origin, *destination)
    minutes = estimated_travel_minutes(distance, mode)
    return TravelEstimate(
        mode=mode,
        distance_km=distance,
        duration_minutes=minutes,
        distance=f"{distance:.1f} km",
        duration=f"{minutes} mins",
        steps=[f"Travel {distance:.1f} km by {mode}"],
    )


def travel_options(
    origin: tuple[float, float],
    destination: tuple[float, float],
) -> TravelOptions:
    """Straight-line estimates for every mode, from ``origin`` to ``destination`` (lat, lng)."""
    return TravelOptions(
        driving=estimate_route(origin, destination, "driving"),
        walking=estimate_route(origin, destination, "walking"),
        transit=estimate_route(origin, destination, "transit"),
    )
