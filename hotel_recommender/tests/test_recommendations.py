import pytest
from fastapi.testclient import TestClient

from hotel_recommender.app import app
from hotel_recommender.recommendations.config import RecommendationConfig
from hotel_recommender.recommendations.data_store import get_hotels, lookup_spots
from hotel_recommender.recommendations.engine import InvalidInputError, recommend_hotels
from hotel_recommender.recommendations.models import FilterConfig, RecommendationRequest
from hotel_recommender.recommendations.retrieval import get_recommendations

client = TestClient(app)

FIVE_SPOTS = [1, 2, 3, 4, 5]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata_lists_catalog_and_factors():
    resp = client.get("/metadata")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["spots"]) == 8
    assert body["price_bounds"] == {"min": 2200.0, "max": 5800.0}
    assert body["rating_options"] == [0.0, 3.0, 3.5, 4.0, 4.5]
    assert {f["name"]: f["weight"] for f in body["scoring_factors"]} == {
        "distance": 0.3,
        "centrality": 0.3,
        "rating": 0.2,
        "price": 0.2,
    }


def test_hotel_catalog_endpoints():
    resp = client.get("/hotels")
    assert resp.status_code == 200
    assert len(resp.json()) == 20

    resp = client.get("/hotels/1")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Parakkat Nature Hotels & Resorts"
    assert body["amenities"] == ["WiFi", "Restaurant", "Spa", "Garden View"]

    assert client.get("/hotels/999").status_code == 404
    assert len(client.get("/spots").json()) == 8


def test_recommendations_returns_top_five():
    resp = client.post("/recommendations", json={"spot_ids": FIVE_SPOTS})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_candidates"] == 20
    assert len(body["recommendations"]) == 5
    assert [item["rank"] for item in body["recommendations"]] == [1, 2, 3, 4, 5]


def test_recommendations_score_ordering():
    resp = client.post("/recommendations", json={"spot_ids": [1, 3, 6, 7]})
    scores = [item["score"] for item in resp.json()["recommendations"]]
    assert scores == sorted(scores, reverse=True)


def test_recommendations_preserve_engine_order():
    resp = client.post(
        "/recommendations",
        json={"spot_ids": [2, 4, 5], "min_price": 2000, "max_price": 5000},
    )
    body = resp.json()

    expected = recommend_hotels(
        lookup_spots([2, 4, 5]),
        get_hotels(),
        FilterConfig(min_price=2000, max_price=5000, min_rating=0),
    )
    assert [item["hotel"]["id"] for item in body["recommendations"]] == [
        r.hotel.id for r in expected
    ]
    assert [item["score"] for item in body["recommendations"]] == [r.score for r in expected]


def test_recommendations_include_score_breakdown_and_reasons():
    resp = client.post("/recommendations", json={"spot_ids": FIVE_SPOTS})
    item = resp.json()["recommendations"][0]
    for key in ("distance_score", "centrality_score", "rating_score", "price_score"):
        assert 0.0 <= item[key] <= 1.0
    assert item["display_distance_km"] == pytest.approx(item["planar_distance"] * 100)
    assert item["reasons"][-1] == f"{item['score'] * 100:.1f}% match score"
    assert f"{item['hotel']['rating']:g}/5 stars" in item["reasons"][1]


def test_recommendations_analysis_panel():
    resp = client.post(
        "/recommendations",
        json={"spot_ids": [1, 3], "min_price": 2000, "max_price": 4000, "min_rating": 4},
    )
    body = resp.json()
    analysis = body["analysis"]
    assert analysis["selected_spots"] == 2
    assert analysis["spot_names"] == ["Eravikulam National Park", "Tea Museum"]
    assert analysis["price_range"] == [2000.0, 4000.0]
    assert analysis["min_rating_label"] == "4+"
    assert body["centroid"]["lat"] == pytest.approx((10.1956 + 10.0889) / 2)


def test_recommendations_filters_by_min_rating():
    resp = client.post("/recommendations", json={"spot_ids": FIVE_SPOTS, "min_rating": 4.5})
    body = resp.json()
    assert body["total_candidates"] == 10
    for item in body["recommendations"]:
        assert item["hotel"]["rating"] >= 4.5


def test_recommendations_filters_by_price():
    resp = client.post(
        "/recommendations",
        json={"spot_ids": FIVE_SPOTS, "min_price": 2000, "max_price": 3000},
    )
    for item in resp.json()["recommendations"]:
        assert 2000 <= item["hotel"]["price"] <= 3000


def test_recommendations_empty_when_everything_filtered():
    resp = client.post("/recommendations", json={"spot_ids": FIVE_SPOTS, "min_rating": 5})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_candidates"] == 0
    assert body["recommendations"] == []


def test_recommendations_duplicate_spots_counted_once():
    resp = client.post("/recommendations", json={"spot_ids": [3, 3, 3]})
    assert resp.status_code == 200
    assert resp.json()["analysis"]["selected_spots"] == 1


def test_recommendations_unknown_spot_is_404():
    resp = client.post("/recommendations", json={"spot_ids": [1, 999]})
    assert resp.status_code == 404
    assert "999" in resp.json()["detail"]


def test_recommendations_validation_rejects_empty_selection():
    resp = client.post("/recommendations", json={"spot_ids": []})
    assert resp.status_code == 422


def test_recommendations_validation_rejects_inverted_price_range():
    resp = client.post(
        "/recommendations",
        json={"spot_ids": FIVE_SPOTS, "min_price": 5000, "max_price": 1000},
    )
    assert resp.status_code == 422


def test_recommendations_validation_rejects_bad_rating():
    resp = client.post("/recommendations", json={"spot_ids": FIVE_SPOTS, "min_rating": 6.0})
    assert resp.status_code == 422


def test_minimum_selection_is_configurable():
    strict = RecommendationConfig(min_selected_spots=5)
    with pytest.raises(InvalidInputError):
        get_recommendations(RecommendationRequest(spot_ids=[1, 2, 3]), config=strict)

    response = get_recommendations(RecommendationRequest(spot_ids=FIVE_SPOTS), config=strict)
    assert len(response.recommendations) == 5
