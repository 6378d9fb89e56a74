from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PointOfInterest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    lat: float
    lng: float


class Hotel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    lat: float
    lng: float
    rating: float = Field(..., ge=0.0, le=5.0)
    price: float = Field(..., gt=0)
    location: str
    amenities: tuple[str, ...] = ()
    website: str | None = None


class FilterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_price: float = Field(default=0.0, ge=0.0)
    max_price: float = Field(default=float("inf"), ge=0.0)
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)

    @model_validator(mode="after")
    def _check_price_range(self) -> FilterConfig:
        if self.min_price > self.max_price:
            raise ValueError("min_price must not exceed max_price")
        return self

    def accepts(self, hotel: Hotel) -> bool:
        return (
            hotel.price >= self.min_price
            and hotel.price <= self.max_price
            and hotel.rating >= self.min_rating
        )


class ScoredRecommendation(BaseModel):
    """One ranked hotel together with every component of its score."""

    model_config = ConfigDict(frozen=True)

    hotel: Hotel
    score: float
    planar_distance: float
    distance_score: float
    centrality_score: float
    rating_score: float
    price_score: float


# ── API schemas ──────────────────────────────────────────────────────────


class RecommendationRequest(BaseModel):
    spot_ids: list[int] = Field(
        ..., min_length=1, description="Ids of the selected points of interest"
    )
    min_price: float = Field(default=1500.0, ge=0.0)
    max_price: float = Field(default=6000.0, ge=0.0)
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)

    @model_validator(mode="after")
    def _check_price_range(self) -> RecommendationRequest:
        if self.min_price > self.max_price:
            raise ValueError("min_price must not exceed max_price")
        return self

    def to_filter(self) -> FilterConfig:
        return FilterConfig(
            min_price=self.min_price,
            max_price=self.max_price,
            min_rating=self.min_rating,
        )


class Centroid(BaseModel):
    lat: float
    lng: float


class RecommendationItem(BaseModel):
    rank: int
    hotel: Hotel
    score: float
    planar_distance: float
    display_distance_km: float
    distance_score: float
    centrality_score: float
    rating_score: float
    price_score: float
    reasons: list[str] = Field(default_factory=list)


class ScoringFactor(BaseModel):
    name: str
    label: str
    weight: float


class RecommendationAnalysis(BaseModel):
    selected_spots: int
    spot_names: list[str]
    price_range: tuple[float, float]
    min_rating_label: str
    scoring_factors: list[ScoringFactor]


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    total_candidates: int
    centroid: Centroid
    analysis: RecommendationAnalysis
