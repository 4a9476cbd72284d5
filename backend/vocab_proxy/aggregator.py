"""Cached learned-word aggregation: profile, payload, paginated lexemes."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import List, Optional

import httpx

from .cache import ResponseCache, lexeme_cache
from .config import Settings, get_settings
from .errors import VocabProxyError
from .fingerprint import cache_key, fingerprint
from .models import LearnedLexeme, fallback_collection
from .paginator import fetch_all
from .payload import build_payload
from .telemetry import AGGREGATED, CACHE_HIT, CACHE_MISS, FALLBACK, emit_event
from .upstream import UpstreamClient

logger = logging.getLogger(__name__)


def aggregate_learned_words(upstream: UpstreamClient, user_id: str, bearer_token: str) -> List[LearnedLexeme]:
    """Run the uncached pipeline; every failure propagates as raised."""
    started = perf_counter()
    headers = upstream.build_headers(bearer_token)
    dump = upstream.fetch_profile(user_id, headers)
    payload, target_language, source_language = build_payload(dump)
    logger.debug(
        "Built payload with %d skills for course %s<-%s",
        len(payload.progressed_skills),
        target_language,
        source_language,
    )

    result = fetch_all(upstream, user_id, target_language, source_language, headers, payload)
    emit_event(
        AGGREGATED,
        lexeme_count=len(result.lexemes),
        total_count=result.total_count,
        page_count=result.page_count,
        skill_count=len(payload.progressed_skills),
        latency_ms=int((perf_counter() - started) * 1000),
    )
    return result.lexemes


def get_learned_words(
    user_id: str,
    bearer_token: str,
    *,
    cache: Optional[ResponseCache] = None,
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> List[LearnedLexeme]:
    """Return a user's learned words, from cache when a fresh copy exists.

    Any failure is converted into a one-item placeholder collection, which
    is returned but never cached so the next call retries upstream.
    """
    settings = settings or get_settings()
    cache = cache if cache is not None else lexeme_cache
    token = fingerprint(user_id, bearer_token)
    key = cache_key(settings.cache_namespace, token)
    logger.debug("Learned words cache key prefix=%s", token[:12])

    cached = cache.get(key)
    if cached is not None:
        emit_event(CACHE_HIT, lexeme_count=len(cached))
        return cached
    emit_event(CACHE_MISS)

    try:
        with UpstreamClient(settings, client=client) as upstream:
            lexemes = aggregate_learned_words(upstream, user_id, bearer_token)
    except VocabProxyError as exc:
        logger.warning("Learned words aggregation failed (%s): %s", exc.error_kind, exc)
        emit_event(FALLBACK, error_kind=exc.error_kind)
        return fallback_collection()
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error while aggregating learned words")
        emit_event(FALLBACK, error_kind="unexpected")
        return fallback_collection()

    cache.put(key, lexemes, settings.cache_ttl_seconds)
    return lexemes


__all__ = ["aggregate_learned_words", "get_learned_words"]
