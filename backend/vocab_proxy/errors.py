"""Error kinds raised by the learned-words pipeline."""

from __future__ import annotations

from typing import Optional


class VocabProxyError(RuntimeError):
    """Base class for failures while aggregating learned words."""

    error_kind = "unknown"


class UpstreamTransportError(VocabProxyError):
    """Raised when an upstream request fails or returns a non-success status."""

    error_kind = "transport"

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamResponseError(VocabProxyError):
    """Raised when an upstream body cannot be decoded into the expected shape."""

    error_kind = "parse"


class MalformedProfileError(VocabProxyError):
    """Raised when the profile dump lacks the course fields the payload needs."""

    error_kind = "malformed_profile"


class PaginationProtocolError(VocabProxyError):
    """Raised when the listing endpoint returns a cursor that does not advance."""

    error_kind = "protocol_violation"


__all__ = [
    "MalformedProfileError",
    "PaginationProtocolError",
    "UpstreamResponseError",
    "UpstreamTransportError",
    "VocabProxyError",
]
