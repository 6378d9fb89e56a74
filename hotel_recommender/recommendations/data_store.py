from __future__ import annotations

import json
import logging
from collections.abc import Iterable

import pandas as pd

from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG
from .models import Hotel, PointOfInterest

logger = logging.getLogger(__name__)

_SPOTS_CSV = DEFAULT_INGESTION_CONFIG.spots_path
_HOTELS_CSV = DEFAULT_INGESTION_CONFIG.hotels_path

_spots: tuple[PointOfInterest, ...] | None = None
_hotels: tuple[Hotel, ...] | None = None


class UnknownSpotError(LookupError):
    """Raised when a requested point-of-interest id is not in the catalog."""

    def __init__(self, missing_ids: list[int]):
        self.missing_ids = missing_ids
        super().__init__(f"Unknown tourist spot id(s): {', '.join(map(str, missing_ids))}")


def _parse_amenities(value) -> tuple[str, ...]:
    # stored as a JSON array, see data_ingestion.ingest._encode_amenities
    if pd.isna(value) or not str(value).strip():
        return ()
    return tuple(str(a) for a in json.loads(value))


def _load_spots() -> tuple[PointOfInterest, ...]:
    # round_trip keeps parsed coordinates identical to their decimal literals
    df = pd.read_csv(_SPOTS_CSV, float_precision="round_trip")
    return tuple(
        PointOfInterest(
            id=int(row["id"]),
            name=str(row["name"]),
            lat=float(row["lat"]),
            lng=float(row["lng"]),
        )
        for _, row in df.iterrows()
    )


def _load_hotels() -> tuple[Hotel, ...]:
    df = pd.read_csv(_HOTELS_CSV, float_precision="round_trip")
    return tuple(
        Hotel(
            id=int(row["id"]),
            name=str(row["name"]),
            lat=float(row["lat"]),
            lng=float(row["lng"]),
            rating=float(row["rating"]),
            price=float(row["price"]),
            location=str(row["location"]) if pd.notna(row["location"]) else "",
            amenities=_parse_amenities(row["amenities"]),
            website=str(row["website"]) if pd.notna(row["website"]) else None,
        )
        for _, row in df.iterrows()
    )


def get_spots() -> tuple[PointOfInterest, ...]:
    """Return the point-of-interest catalog, loading it on first call."""
    global _spots
    if _spots is None:
        _spots = _load_spots()
        logger.info("Loaded %d tourist spots from %s", len(_spots), _SPOTS_CSV)
    return _spots


def get_hotels() -> tuple[Hotel, ...]:
    """Return the hotel catalog, loading it on first call."""
    global _hotels
    if _hotels is None:
        _hotels = _load_hotels()
        logger.info("Loaded %d hotels from %s", len(_hotels), _HOTELS_CSV)
    return _hotels


def get_hotel(hotel_id: int) -> Hotel | None:
    for hotel in get_hotels():
        if hotel.id == hotel_id:
            return hotel
    return None


def get_spot(spot_id: int) -> PointOfInterest | None:
    for spot in get_spots():
        if spot.id == spot_id:
            return spot
    return None


def lookup_spots(spot_ids: Iterable[int]) -> list[PointOfInterest]:
    """Resolve ids to spots in the order given. Raises ``UnknownSpotError`` for missing ids."""
    by_id = {spot.id: spot for spot in get_spots()}
    ids = list(spot_ids)
    missing = [sid for sid in ids if sid not in by_id]
    if missing:
        raise UnknownSpotError(missing)
    return [by_id[sid] for sid in ids]
