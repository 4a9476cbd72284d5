"""Short-lived response caches."""

from .lexeme_cache import LexemeCache, ResponseCache, lexeme_cache

__all__ = ["LexemeCache", "ResponseCache", "lexeme_cache"]
