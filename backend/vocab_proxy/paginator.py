"""Count-then-page retrieval of a user's learned lexemes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .errors import PaginationProtocolError
from .models import CourseContext, LearnedLexeme, ProgressPayload
from .upstream import UpstreamClient

logger = logging.getLogger(__name__)


@dataclass
class LexemeFetchResult:
    lexemes: List[LearnedLexeme] = field(default_factory=list)
    total_count: int = 0
    page_count: int = 0


def fetch_all(
    upstream: UpstreamClient,
    user_id: str,
    target_language: str,
    source_language: str,
    headers: Dict[str, str],
    progress_payload: ProgressPayload,
) -> LexemeFetchResult:
    """Fetch every learned lexeme, concatenating pages in upstream order.

    The count endpoint bounds the loop. A page without ``nextStartIndex``
    ends it, and a cursor that fails to move forward raises
    :class:`PaginationProtocolError` instead of looping.
    """
    course = CourseContext(target_language=target_language, source_language=source_language)
    total_count = upstream.fetch_lexeme_count(user_id, course, headers, progress_payload)

    limit = upstream.settings.page_limit
    page_payload = progress_payload.model_copy(update={"last_total_lexeme_count": limit})

    result = LexemeFetchResult(total_count=total_count)
    start_index = 0
    while start_index < total_count:
        page = upstream.fetch_lexeme_page(user_id, course, headers, page_payload, start_index)
        result.page_count += 1
        result.lexemes.extend(page.learned_lexemes)

        next_index = page.next_start_index
        if next_index is None:
            break
        if next_index <= start_index:
            raise PaginationProtocolError(
                f"nextStartIndex {next_index} does not advance past startIndex {start_index}"
            )
        start_index = next_index

    logger.debug(
        "Collected %d of %d lexemes across %d pages",
        len(result.lexemes),
        total_count,
        result.page_count,
    )
    return result


__all__ = ["LexemeFetchResult", "fetch_all"]
