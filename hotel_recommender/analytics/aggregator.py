from __future__ import annotations

from collections import Counter
from typing import Any

from ..recommendations.config import DEFAULT_RECOMMENDATION_CONFIG


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 3) if times else 0.0

    # Most selected spots
    spot_counter: Counter[str] = Counter()
    for s in searches:
        for name in s.get("spot_names", []) or []:
            spot_counter[name] += 1
    top_spots = [{"name": n, "count": c} for n, c in spot_counter.most_common(10)]

    # Most frequently top-ranked hotels
    hotel_counter: Counter[int] = Counter(
        s["top_hotel_id"] for s in searches if s.get("top_hotel_id") is not None
    )
    top_hotels = [{"hotel_id": h, "count": c} for h, c in hotel_counter.most_common(10)]

    # Filter usage rates, relative to the request defaults
    default_min, default_max = DEFAULT_RECOMMENDATION_CONFIG.default_price_range
    price_changed = sum(
        1 for s in searches
        if (s.get("min_price"), s.get("max_price")) != (default_min, default_max)
    )
    rating_used = sum(1 for s in searches if s.get("min_rating", 0) > 0)
    filter_usage = {
        "price_range": _rate(price_changed, total),
        "rating": _rate(rating_used, total),
    }

    # Selection size
    sizes = [len(s.get("spot_ids", [])) for s in searches]
    avg_selected = round(sum(sizes) / len(sizes), 2) if sizes else 0.0

    empty_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    # Cache stats
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))
    cache_misses = total - cache_hits

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "avg_selected_spots": avg_selected,
        "top_spots": top_spots,
        "top_hotels": top_hotels,
        "filter_usage": filter_usage,
        "empty_result_rate": _rate(empty_results, total),
        "cache_stats": {
            "hits": cache_hits,
            "misses": cache_misses,
            "hit_rate": _rate(cache_hits, total),
        },
    }
