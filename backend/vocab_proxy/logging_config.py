import logging
import os
from logging.config import dictConfig
from typing import Optional

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# httpx logs full request URLs at INFO, and those carry user ids.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler; VOCAB_PROXY_DEBUG_HTTP=1 re-enables wire logs."""
    resolved = (level or os.getenv("VOCAB_PROXY_LOG_LEVEL", "INFO")).upper()
    debug_http = os.getenv("VOCAB_PROXY_DEBUG_HTTP", "0") == "1"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": DEFAULT_LOG_FORMAT},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                name: {"level": "DEBUG" if debug_http else "WARNING"}
                for name in _NOISY_LOGGERS
            },
            "root": {
                "handlers": ["default"],
                "level": resolved,
            },
        }
    )

    if debug_http:
        logging.getLogger("uvicorn.access").setLevel(logging.DEBUG)
