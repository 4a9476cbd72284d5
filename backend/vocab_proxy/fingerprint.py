"""Cache-key derivation from a user id and bearer token.

The digest only deduplicates upstream calls for the same credential pair.
It is not very secure and must never be used to authorize anything.
"""

from __future__ import annotations

import base64
import hashlib
from urllib.parse import quote


def _digest(value: str) -> str:
    raw = hashlib.sha256(value.encode("utf-8")).digest()
    return base64.b64encode(raw).decode("ascii")


def fingerprint(user_id: str, bearer_token: str) -> str:
    return f"{_digest(user_id)}{_digest(bearer_token)}"


def cache_key(namespace: str, token: str) -> str:
    """Join the fingerprint onto a fixed namespace so keys stay URL-shaped."""
    return f"{namespace}{quote(token, safe='')}"


__all__ = ["cache_key", "fingerprint"]
