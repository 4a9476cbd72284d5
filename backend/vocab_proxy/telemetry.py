"""Structured events for cache and aggregation outcomes."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Dict, FrozenSet, List

logger = logging.getLogger("vocab_proxy.telemetry")

CACHE_HIT = "learned_words_cache_hit"
CACHE_MISS = "learned_words_cache_miss"
AGGREGATED = "learned_words_aggregated"
FALLBACK = "learned_words_fallback"

_REDACTED_FIELDS: FrozenSet[str] = frozenset({"bearer_token", "user_id", "headers", "authorization"})


@dataclass(frozen=True)
class TelemetryEvent:
    name: str
    payload: Dict[str, Any]


Listener = Callable[[TelemetryEvent], None]

_listeners: List[Listener] = []
_lock = RLock()


def register_listener(listener: Listener) -> None:
    with _lock:
        _listeners.append(listener)


def clear_listeners() -> None:
    with _lock:
        _listeners.clear()


def emit_event(name: str, **fields: Any) -> None:
    """Fan an event out to listeners and log it as a single JSON line.

    Credential-bearing fields are dropped before anything leaves this
    function, so callers may pass request context through unfiltered.
    """
    payload = {key: value for key, value in fields.items() if key.lower() not in _REDACTED_FIELDS}
    event = TelemetryEvent(name=name, payload=payload)

    with _lock:
        listeners = list(_listeners)

    for listener in listeners:
        try:
            listener(event)
        except Exception:  # noqa: BLE001
            logger.exception("Telemetry listener failed for %s", name)

    logger.info("TELEMETRY %s", json.dumps({"event": name, **payload}, default=str))


__all__ = [
    "AGGREGATED",
    "CACHE_HIT",
    "CACHE_MISS",
    "FALLBACK",
    "TelemetryEvent",
    "clear_listeners",
    "emit_event",
    "register_listener",
]
