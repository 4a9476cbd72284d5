"""Form page, learned-words table, and CSV/JSON downloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse, Response

from .aggregator import get_learned_words
from .cache import ResponseCache, lexeme_cache
from .config import Settings, get_settings
from .formatters import render_csv, render_form, render_html, render_json
from .models import LearnedLexeme

router = APIRouter(tags=["vocabulary"])

MISSING_CREDENTIALS = "User ID and Bearer Token are required"


@dataclass(frozen=True)
class Credentials:
    user_id: str
    bearer_token: str


def get_credentials(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    bearer_token: Optional[str] = Query(default=None, alias="bearerToken"),
) -> Credentials:
    if not user_id or not bearer_token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_CREDENTIALS)
    return Credentials(user_id=user_id, bearer_token=bearer_token)


def get_response_cache() -> ResponseCache:
    return lexeme_cache


def get_http_client() -> Optional[httpx.Client]:
    """Upstream transport override hook; ``None`` lets each request own a client."""
    return None


def _learned_words(
    credentials: Credentials = Depends(get_credentials),
    cache: ResponseCache = Depends(get_response_cache),
    settings: Settings = Depends(get_settings),
    client: Optional[httpx.Client] = Depends(get_http_client),
) -> List[LearnedLexeme]:
    return get_learned_words(
        credentials.user_id,
        credentials.bearer_token,
        cache=cache,
        settings=settings,
        client=client,
    )


def _download(body: str, media_type: str, filename: str) -> Response:
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/", response_class=HTMLResponse)
def input_form(settings: Settings = Depends(get_settings)) -> HTMLResponse:
    return HTMLResponse(render_form(settings.source_url))


@router.get("/fetch-words", response_class=HTMLResponse)
def fetch_words(
    credentials: Credentials = Depends(get_credentials),
    lexemes: List[LearnedLexeme] = Depends(_learned_words),
) -> HTMLResponse:
    return HTMLResponse(render_html(lexemes, credentials.user_id, credentials.bearer_token))


@router.get("/download-csv")
def download_csv(lexemes: List[LearnedLexeme] = Depends(_learned_words)) -> Response:
    return _download(render_csv(lexemes), "text/csv", "learned_words.csv")


@router.get("/download-json")
def download_json(lexemes: List[LearnedLexeme] = Depends(_learned_words)) -> Response:
    return _download(render_json(lexemes), "application/json", "learned_words.json")


__all__ = ["Credentials", "get_credentials", "get_http_client", "get_response_cache", "router"]
