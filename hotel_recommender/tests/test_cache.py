from __future__ import annotations

import threading
from unittest.mock import patch

from fastapi.testclient import TestClient

from hotel_recommender.app import app
from hotel_recommender.recommendations import cache as cache_module
from hotel_recommender.recommendations.cache import (
    cache_response,
    clear_cache,
    evict_expired,
    get_cache_stats,
    get_cached_response,
)
from hotel_recommender.recommendations.models import RecommendationRequest
from hotel_recommender.recommendations.retrieval import get_recommendations

client = TestClient(app)


def test_cache_miss_then_hit():
    clear_cache()
    resp1 = client.post("/recommendations", json={"spot_ids": [1, 2, 3, 4, 5]})
    assert resp1.status_code == 200
    stats = get_cache_stats()
    assert stats["misses"] == 1

    # Second identical call is served from the cache
    resp2 = client.post("/recommendations", json={"spot_ids": [1, 2, 3, 4, 5]})
    assert resp2.status_code == 200
    stats = get_cache_stats()
    assert stats["hits"] == 1
    assert resp2.json() == resp1.json()


def test_cache_key_includes_spot_order_and_filters():
    clear_cache()
    client.post("/recommendations", json={"spot_ids": [1, 2, 3]})
    client.post("/recommendations", json={"spot_ids": [3, 2, 1]})
    client.post("/recommendations", json={"spot_ids": [1, 2, 3], "min_rating": 4})
    stats = get_cache_stats()
    assert stats["misses"] == 3
    assert stats["hits"] == 0


def test_duplicate_spot_ids_share_cache_entry():
    clear_cache()
    client.post("/recommendations", json={"spot_ids": [1, 2]})
    client.post("/recommendations", json={"spot_ids": [1, 2, 2, 1]})
    assert get_cache_stats()["hits"] == 1


def test_expired_entries_are_evicted():
    clear_cache()
    client.post("/recommendations", json={"spot_ids": [4, 5]})
    assert get_cache_stats()["size"] == 1

    with patch("hotel_recommender.recommendations.cache._DEFAULT_TTL", 0):
        assert get_cache_stats()["size"] == 0


def test_cache_stats_endpoint():
    clear_cache()
    client.post("/recommendations", json={"spot_ids": [6, 7], "max_price": 4000})
    client.post("/recommendations", json={"spot_ids": [6, 7], "max_price": 4000})
    resp = client.get("/cache/stats")
    assert resp.status_code == 200
    body = resp.json()
    assert body["hits"] == 1
    assert body["hit_rate"] == 50.0
    assert body["ttl_seconds"] == 300


def test_callers_cannot_reorder_cached_results():
    clear_cache()
    request = RecommendationRequest(spot_ids=[1, 2, 3])

    first = get_recommendations(request)
    first.recommendations.reverse()

    second = get_recommendations(request)
    scores = [item.score for item in second.recommendations]
    assert scores == sorted(scores, reverse=True)
    assert get_cache_stats()["hits"] == 1

    second.recommendations.clear()
    third = get_recommendations(request)
    assert len(third.recommendations) == 5


def test_cache_survives_concurrent_writers_and_evictions():
    clear_cache()
    response = get_recommendations(RecommendationRequest(spot_ids=[1]))
    errors: list[BaseException] = []

    def write(offset: int):
        try:
            for i in range(200):
                cache_response(RecommendationRequest(spot_ids=[offset + i]), response)
        except BaseException as exc:
            errors.append(exc)

    def evict():
        try:
            for _ in range(200):
                evict_expired()
                get_cache_stats()
        except BaseException as exc:
            errors.append(exc)

    threads = [threading.Thread(target=write, args=(10_000 + n * 1000,)) for n in range(4)]
    threads += [threading.Thread(target=evict) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert get_cache_stats()["size"] == 801


def test_concurrent_lookups_of_expired_entry_miss_cleanly():
    clear_cache()
    request = RecommendationRequest(spot_ids=[2, 4])
    get_recommendations(request)
    errors: list[BaseException] = []

    def lookup():
        try:
            for _ in range(100):
                assert get_cached_response(request) is None
        except BaseException as exc:
            errors.append(exc)

    with patch("hotel_recommender.recommendations.cache._DEFAULT_TTL", 0):
        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    assert errors == []
    assert get_cache_stats()["misses"] == 801


def test_storing_evicts_stale_entries():
    clear_cache()
    get_recommendations(RecommendationRequest(spot_ids=[5]))
    with patch("hotel_recommender.recommendations.cache._DEFAULT_TTL", 0):
        cache_response(
            RecommendationRequest(spot_ids=[6]),
            get_recommendations(RecommendationRequest(spot_ids=[7])),
        )
        # only the entry just written remains: everything older was stale
        assert len(cache_module._cache) == 1
