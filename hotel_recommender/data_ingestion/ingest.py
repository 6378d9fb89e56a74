from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pandas as pd

from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig


SPOT_COLUMNS: List[str] = ["id", "name", "lat", "lng"]

HOTEL_COLUMNS: List[str] = [
    "id",
    "name",
    "lat",
    "lng",
    "rating",
    "price",
    "location",
    "website",
    "amenities",
]


def _normalize_rating(rating: float | int | str | None) -> float | None:
    if rating is None or pd.isna(rating):
        return None
    raw = str(rating).strip()
    # Handle "X/5" format (e.g. "4.1/5")
    if "/" in raw:
        raw = raw.split("/")[0].strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None

    # Clamp to [0, 5]
    return max(0.0, min(5.0, value))


def _encode_amenities(amenities: list[str] | str | None) -> str:
    """Serialize amenities as a JSON array so names containing commas survive the CSV."""
    if amenities is None:
        items = []
    elif isinstance(amenities, str):
        # raw exports occasionally flatten the list into one comma-separated string
        items = amenities.split(",")
    else:
        items = list(amenities)
    cleaned = [str(a).strip() for a in items if str(a).strip()]
    return json.dumps(cleaned, ensure_ascii=False, separators=(",", ":"))


def _normalize_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    df["lat"] = pd.to_numeric(df["lat"], errors="coerce")
    df["lng"] = pd.to_numeric(df["lng"], errors="coerce")
    return df.dropna(subset=["lat", "lng"])


def normalize_spots(raw: pd.DataFrame) -> pd.DataFrame:
    df = raw.copy()
    df["id"] = pd.to_numeric(df["id"], errors="coerce")
    df = df.dropna(subset=["id"])
    df = _normalize_coordinates(df)
    df["id"] = df["id"].astype(int)
    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df = df.drop_duplicates(subset="id", keep="first")
    return df[SPOT_COLUMNS].reset_index(drop=True)


def normalize_hotels(raw: pd.DataFrame) -> pd.DataFrame:
    df = raw.copy()
    for col in HOTEL_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA

    df["id"] = pd.to_numeric(df["id"], errors="coerce")
    df = df.dropna(subset=["id"])
    df = _normalize_coordinates(df)

    df["price"] = pd.to_numeric(df["price"], errors="coerce")
    df = df[df["price"] > 0].copy()

    df["rating"] = df["rating"].apply(_normalize_rating)
    df = df.dropna(subset=["rating"])

    df["id"] = df["id"].astype(int)
    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df["location"] = df["location"].fillna("").astype(str)
    df["amenities"] = df["amenities"].apply(
        lambda a: _encode_amenities(a if isinstance(a, (list, str)) else None)
    )
    df = df.drop_duplicates(subset="id", keep="first")
    return df[HOTEL_COLUMNS].reset_index(drop=True)


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> tuple[Path, Path]:
    """
    Execute the catalog ingestion pipeline.

    Steps:
    - Read raw spot and hotel exports.
    - Map raw fields into the canonical catalog columns.
    - Persist cleaned data as CSV for the recommendation service.
    """

    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    spots = normalize_spots(pd.read_json(config.raw_spots_path, dtype=False, precise_float=True))
    hotels = normalize_hotels(pd.read_json(config.raw_hotels_path, dtype=False, precise_float=True))

    spots.to_csv(config.spots_path, index=False)
    hotels.to_csv(config.hotels_path, index=False)
    return config.spots_path, config.hotels_path


if __name__ == "__main__":
    spots_path, hotels_path = run_ingestion()
    print(f"Ingestion complete. Processed catalog saved to: {spots_path}, {hotels_path}")
