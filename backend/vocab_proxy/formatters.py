"""Render learned-word collections as an HTML page, CSV, or JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence
from urllib.parse import urlencode

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import LearnedLexeme

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
CSV_HEADER = "Text,Translations,Is New,Audio URL"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_form(source_url: str) -> str:
    return _env.get_template("form.html").render(source_url=source_url)


def render_html(lexemes: Sequence[LearnedLexeme], user_id: str, bearer_token: str) -> str:
    query = urlencode({"userId": user_id, "bearerToken": bearer_token})
    return _env.get_template("learned_words.html").render(
        lexemes=lexemes,
        csv_href=f"/download-csv?{query}",
        json_href=f"/download-json?{query}",
    )


def render_csv(lexemes: Sequence[LearnedLexeme]) -> str:
    # Text and translations are wrapped in quotes but embedded quotes and
    # commas are not escaped.
    rows = [
        f'"{lexeme.text}","{"; ".join(lexeme.translations)}",'
        f"{'true' if lexeme.is_new else 'false'},{lexeme.audio_url}"
        for lexeme in lexemes
    ]
    return CSV_HEADER + "\n" + "\n".join(rows)


def render_json(lexemes: Sequence[LearnedLexeme]) -> str:
    return json.dumps([lexeme.to_wire() for lexeme in lexemes], indent=2, ensure_ascii=False)


__all__ = ["CSV_HEADER", "render_csv", "render_form", "render_html", "render_json"]
