"""Process-local TTL cache for aggregated learned-word collections."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from ..models import LearnedLexeme

logger = logging.getLogger(__name__)


class ResponseCache(Protocol):
    def get(self, key: str) -> Optional[List[LearnedLexeme]]: ...

    def put(self, key: str, value: Sequence[LearnedLexeme], ttl_seconds: float) -> None: ...


@dataclass
class _CacheEntry:
    body: str
    expires_at: float


class LexemeCache:
    """Stores collections serialized, so callers never share mutable models."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}
        self._lock = RLock()

    def get(self, key: str) -> Optional[List[LearnedLexeme]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                self._entries.pop(key, None)
                return None
            body = entry.body
        return [LearnedLexeme.model_validate(item) for item in json.loads(body)]

    def put(self, key: str, value: Sequence[LearnedLexeme], ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            logger.debug("Skipping cache write with non-positive ttl=%s", ttl_seconds)
            return
        body = json.dumps([lexeme.to_wire() for lexeme in value], ensure_ascii=False)
        with self._lock:
            self._entries[key] = _CacheEntry(body=body, expires_at=self._clock() + ttl_seconds)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


lexeme_cache = LexemeCache()

__all__ = ["LexemeCache", "ResponseCache", "lexeme_cache"]
