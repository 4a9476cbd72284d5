import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.3"
)


class Settings(BaseSettings):
    upstream_base_url: str = Field(
        "https://www.duolingo.com/2017-06-30",
        alias="VOCAB_PROXY_UPSTREAM_BASE_URL",
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, alias="VOCAB_PROXY_USER_AGENT")
    page_limit: int = Field(50, ge=1, alias="VOCAB_PROXY_PAGE_LIMIT")
    sort_by: str = Field("LEARNED_DATE", alias="VOCAB_PROXY_SORT_BY")
    cache_ttl_seconds: int = Field(600, ge=0, alias="VOCAB_PROXY_CACHE_TTL_SECONDS")
    cache_namespace: str = Field("https://example.com/", alias="VOCAB_PROXY_CACHE_NAMESPACE")
    upstream_timeout_seconds: Optional[float] = Field(None, alias="VOCAB_PROXY_UPSTREAM_TIMEOUT_SECONDS")
    source_url: str = Field(
        "https://github.com/6a67/duolingo-vocab-cfworker",
        alias="VOCAB_PROXY_SOURCE_URL",
    )

    class Config:
        env_file = os.getenv("ENV_FILE", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        populate_by_name = True


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid proxy configuration: {exc}") from exc
