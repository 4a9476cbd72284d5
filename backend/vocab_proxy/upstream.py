"""HTTP client for the Duolingo profile and learned-lexeme endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .config import Settings
from .errors import MalformedProfileError, UpstreamResponseError, UpstreamTransportError
from .models import CourseContext, LexemeCountResponse, LexemePageResponse, ProgressPayload

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class UpstreamClient:
    """Thin wrapper over ``httpx.Client``; one instance serves one request."""

    def __init__(self, settings: Settings, *, client: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        self._client = client or httpx.Client(timeout=settings.upstream_timeout_seconds)
        self._owns_client = client is None
        self._base_url = settings.upstream_base_url.rstrip("/")

    def __enter__(self) -> "UpstreamClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def build_headers(self, bearer_token: str) -> Dict[str, str]:
        return {
            "User-Agent": self.settings.user_agent,
            "Authorization": f"Bearer {bearer_token}",
        }

    def _user_url(self, user_id: str) -> str:
        return f"{self._base_url}/users/{quote(user_id, safe='')}"

    def _lexemes_url(self, user_id: str, course: CourseContext) -> str:
        return (
            f"{self._user_url(user_id)}/courses/"
            f"{quote(course.target_language, safe='')}/{quote(course.source_language, safe='')}/learned-lexemes"
        )

    def _send(self, method: str, url: str, step: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamTransportError(
                f"{step} request returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(f"{step} request failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamResponseError(f"{step} response was not JSON") from exc

    @staticmethod
    def _parse(model: Type[_ModelT], data: Any, step: str) -> _ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise UpstreamResponseError(f"{step} response had an unexpected shape: {exc}") from exc

    def fetch_profile(self, user_id: str, headers: Dict[str, str]) -> Dict[str, Any]:
        data = self._send("GET", self._user_url(user_id), "profile", params={"fields": "currentCourse"}, headers=headers)
        if not isinstance(data, dict):
            raise MalformedProfileError("profile response was not a JSON object")
        return data

    def fetch_lexeme_count(
        self,
        user_id: str,
        course: CourseContext,
        headers: Dict[str, str],
        payload: ProgressPayload,
    ) -> int:
        data = self._send(
            "POST",
            f"{self._lexemes_url(user_id, course)}/count",
            "lexeme count",
            headers=headers,
            json=payload.to_wire(),
        )
        return self._parse(LexemeCountResponse, data, "lexeme count").lexeme_count

    def fetch_lexeme_page(
        self,
        user_id: str,
        course: CourseContext,
        headers: Dict[str, str],
        payload: ProgressPayload,
        start_index: int,
    ) -> LexemePageResponse:
        params = {
            "limit": self.settings.page_limit,
            "sortBy": self.settings.sort_by,
            "startIndex": start_index,
        }
        data = self._send(
            "POST",
            self._lexemes_url(user_id, course),
            "lexeme page",
            params=params,
            headers=headers,
            json=payload.to_wire(),
        )
        page = self._parse(LexemePageResponse, data, "lexeme page")
        logger.debug("Fetched %d lexemes at startIndex=%d", len(page.learned_lexemes), start_index)
        return page


__all__ = ["UpstreamClient"]
