"""
Configuration for catalog ingestion.
"""

from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class IngestionConfig:
    """
    Where raw catalog exports are read from and where the canonical CSVs go.
    """

    raw_data_dir: Path = _DATA_DIR / "raw"
    processed_data_dir: Path = _DATA_DIR / "processed"
    spots_filename: str = "spots"
    hotels_filename: str = "hotels"

    @property
    def raw_spots_path(self) -> Path:
        return self.raw_data_dir / f"{self.spots_filename}.json"

    @property
    def raw_hotels_path(self) -> Path:
        return self.raw_data_dir / f"{self.hotels_filename}.json"

    @property
    def spots_path(self) -> Path:
        return self.processed_data_dir / f"{self.spots_filename}.csv"

    @property
    def hotels_path(self) -> Path:
        return self.processed_data_dir / f"{self.hotels_filename}.csv"


DEFAULT_INGESTION_CONFIG = IngestionConfig()
