from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from typing import Any

from .models import RecommendationRequest, RecommendationResponse

logger = logging.getLogger(__name__)

_cache: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0
_DEFAULT_TTL = 300  # 5 minutes

# Sync endpoints run in the threadpool; every access to the module state holds this.
_lock = threading.Lock()


def make_key(request: RecommendationRequest) -> str:
    # spot order stays in the key: it fixes the summation order of the centroid
    payload = json.dumps(request.model_dump(), sort_keys=True)
    return hashlib.sha256(payload.encode()).hexdigest()[:16]


def _expired(entry: dict[str, Any], now: float) -> bool:
    return now - entry["created_at"] >= _DEFAULT_TTL


def _evict_expired_locked(now: float) -> int:
    stale = [key for key, entry in _cache.items() if _expired(entry, now)]
    for key in stale:
        del _cache[key]
    return len(stale)


def get_cached_response(request: RecommendationRequest) -> RecommendationResponse | None:
    """Return a private copy of the cached response, or ``None`` on a miss."""
    global _hits, _misses
    key = make_key(request)
    with _lock:
        entry = _cache.get(key)
        if entry and not _expired(entry, time.time()):
            _hits += 1
            logger.debug("Recommendation cache hit for key %s", key)
            response = entry["response"]
        else:
            _cache.pop(key, None)
            _misses += 1
            return None
    return response.model_copy(deep=True)


def cache_response(request: RecommendationRequest, response: RecommendationResponse) -> None:
    # Stored copy is never handed out, so callers cannot reorder what later callers see.
    stored = response.model_copy(deep=True)
    key = make_key(request)
    with _lock:
        now = time.time()
        _evict_expired_locked(now)
        _cache[key] = {"response": stored, "created_at": now}


def evict_expired() -> int:
    """Drop stale entries and return how many were removed."""
    with _lock:
        return _evict_expired_locked(time.time())


def get_cache_stats() -> dict:
    with _lock:
        _evict_expired_locked(time.time())
        total = _hits + _misses
        return {
            "size": len(_cache),
            "hits": _hits,
            "misses": _misses,
            "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
            "ttl_seconds": _DEFAULT_TTL,
        }


def clear_cache() -> None:
    global _hits, _misses
    with _lock:
        _cache.clear()
        _hits = 0
        _misses = 0
