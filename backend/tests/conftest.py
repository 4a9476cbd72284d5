from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import httpx
import pytest

from vocab_proxy.cache import LexemeCache
from vocab_proxy.config import Settings
from vocab_proxy.telemetry import TelemetryEvent, clear_listeners, register_listener

BASE_URL = "https://upstream.test/2017-06-30"


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def lexeme(text: str, *, translations: Optional[List[str]] = None, is_new: bool = False) -> Dict[str, Any]:
    return {
        "text": text,
        "translations": translations if translations is not None else [f"{text}-en"],
        "isNew": is_new,
        "audioURL": f"https://cdn.test/{text}.mp3",
    }


def level(skill_id: Optional[str], finished_sessions: Any, state: str = "active") -> Dict[str, Any]:
    data: Dict[str, Any] = {"state": state, "finishedSessions": finished_sessions}
    if skill_id is not None:
        data["pathLevelMetadata"] = {"skillId": skill_id}
    else:
        data["pathLevelMetadata"] = {}
    return data


def profile(levels: List[Dict[str, Any]], learning: str = "es", source: str = "en") -> Dict[str, Any]:
    return {
        "currentCourse": {
            "learningLanguage": learning,
            "fromLanguage": source,
            "pathSectioned": [{"units": [{"levels": levels}]}],
        }
    }


@dataclass
class FakeDuolingo:
    """Routes requests the way the upstream API does and records each one."""

    profile: Dict[str, Any] = field(default_factory=lambda: profile([level("skill-a", 2, "passed")]))
    lexeme_count: Any = 0
    pages: Dict[int, Dict[str, Any]] = field(default_factory=dict)
    profile_status: int = 200
    requests: List[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/learned-lexemes/count"):
            return httpx.Response(200, json={"lexemeCount": self.lexeme_count})
        if path.endswith("/learned-lexemes"):
            start_index = int(request.url.params["startIndex"])
            return httpx.Response(200, json=self.pages[start_index])
        if request.method == "GET":
            return httpx.Response(self.profile_status, json=self.profile)
        return httpx.Response(404, json={"error": "unexpected"})

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def page_requests(self) -> List[httpx.Request]:
        return [req for req in self.requests if req.url.path.endswith("/learned-lexemes")]

    @staticmethod
    def body(request: httpx.Request) -> Dict[str, Any]:
        return json.loads(request.content)


def page(items: List[Dict[str, Any]], next_start_index: Optional[int] = None) -> Dict[str, Any]:
    pagination: Dict[str, Any] = {}
    if next_start_index is not None:
        pagination["nextStartIndex"] = next_start_index
    return {"learnedLexemes": items, "pagination": pagination}


@pytest.fixture
def settings() -> Settings:
    return Settings(upstream_base_url=BASE_URL)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> LexemeCache:
    return LexemeCache(clock=clock)


@pytest.fixture
def fake_upstream() -> FakeDuolingo:
    return FakeDuolingo()


@pytest.fixture
def events() -> Iterator[List[TelemetryEvent]]:
    collected: List[TelemetryEvent] = []
    clear_listeners()
    register_listener(collected.append)
    yield collected
    clear_listeners()
