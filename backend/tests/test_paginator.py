from __future__ import annotations

import pytest

from conftest import FakeDuolingo, lexeme, page
from vocab_proxy.errors import PaginationProtocolError, UpstreamResponseError
from vocab_proxy.models import ProgressedSkill, ProgressPayload, SkillRef
from vocab_proxy.paginator import fetch_all
from vocab_proxy.upstream import UpstreamClient

HEADERS = {"User-Agent": "test-agent", "Authorization": "Bearer token"}


def _payload() -> ProgressPayload:
    return ProgressPayload(
        progressed_skills=[ProgressedSkill(skill_id=SkillRef(id="skill-a"), finished_levels=1, finished_sessions=4)]
    )


def _fetch(fake: FakeDuolingo, settings, payload: ProgressPayload | None = None):
    with UpstreamClient(settings, client=fake.client()) as upstream:
        return fetch_all(upstream, "42", "es", "en", HEADERS, payload or _payload())


def test_pages_until_next_start_index_is_absent(fake_upstream: FakeDuolingo, settings) -> None:
    fake_upstream.lexeme_count = 120
    fake_upstream.pages = {
        0: page([lexeme(f"w{i}") for i in range(50)], next_start_index=50),
        50: page([lexeme(f"w{i}") for i in range(50, 100)], next_start_index=100),
        100: page([lexeme(f"w{i}") for i in range(100, 120)]),
    }

    result = _fetch(fake_upstream, settings)

    assert len(fake_upstream.page_requests()) == 3
    assert result.page_count == 3
    assert result.total_count == 120
    assert len(result.lexemes) == 120
    assert [word.text for word in result.lexemes[:2]] == ["w0", "w1"]
    assert result.lexemes[-1].text == "w119"


def test_zero_count_makes_no_page_requests(fake_upstream: FakeDuolingo, settings) -> None:
    fake_upstream.lexeme_count = 0

    result = _fetch(fake_upstream, settings)

    assert fake_upstream.page_requests() == []
    assert result.lexemes == []


def test_loop_stops_once_cursor_reaches_total(fake_upstream: FakeDuolingo, settings) -> None:
    fake_upstream.lexeme_count = 50
    fake_upstream.pages = {0: page([lexeme("uno")], next_start_index=50)}

    result = _fetch(fake_upstream, settings)

    assert len(fake_upstream.page_requests()) == 1
    assert [word.text for word in result.lexemes] == ["uno"]


def test_page_requests_carry_limit_sort_and_last_total(fake_upstream: FakeDuolingo, settings) -> None:
    fake_upstream.lexeme_count = 10
    fake_upstream.pages = {0: page([lexeme("uno")])}

    _fetch(fake_upstream, settings)

    count_request, page_request = fake_upstream.requests
    assert count_request.url.path == "/2017-06-30/users/42/courses/es/en/learned-lexemes/count"
    assert "lastTotalLexemeCount" not in FakeDuolingo.body(count_request)

    assert page_request.url.path == "/2017-06-30/users/42/courses/es/en/learned-lexemes"
    assert page_request.url.params["limit"] == "50"
    assert page_request.url.params["sortBy"] == "LEARNED_DATE"
    assert page_request.url.params["startIndex"] == "0"
    body = FakeDuolingo.body(page_request)
    assert body["lastTotalLexemeCount"] == 50
    assert body["progressedSkills"] == [{"skillId": {"id": "skill-a"}, "finishedLevels": 1, "finishedSessions": 4}]
    assert page_request.headers["authorization"] == "Bearer token"


def test_caller_payload_is_not_mutated(fake_upstream: FakeDuolingo, settings) -> None:
    fake_upstream.lexeme_count = 1
    fake_upstream.pages = {0: page([lexeme("uno")])}
    payload = _payload()

    _fetch(fake_upstream, settings, payload)

    assert payload.last_total_lexeme_count is None


@pytest.mark.parametrize("next_index", [0, 30])
def test_non_advancing_cursor_is_a_protocol_violation(fake_upstream: FakeDuolingo, settings, next_index: int) -> None:
    fake_upstream.lexeme_count = 100
    fake_upstream.pages = {
        0: page([lexeme("uno")], next_start_index=30),
        30: page([lexeme("dos")], next_start_index=next_index),
    }

    with pytest.raises(PaginationProtocolError):
        _fetch(fake_upstream, settings)


def test_unparseable_count_is_a_parse_error(fake_upstream: FakeDuolingo, settings) -> None:
    fake_upstream.lexeme_count = "many"

    with pytest.raises(UpstreamResponseError):
        _fetch(fake_upstream, settings)
