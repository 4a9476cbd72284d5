import logging
from typing import Dict

from fastapi import FastAPI

from .config import get_settings
from .logging_config import configure_logging
from .vocab_routes import router as vocab_router


configure_logging()
logger = logging.getLogger(__name__)
app = FastAPI(title="Duolingo Vocabulary Proxy", version="0.1.0")
app.include_router(vocab_router)

settings_snapshot = get_settings()
logger.info("Proxy starting with upstream: %s", settings_snapshot.upstream_base_url)
logger.info("Learned words cache ttl: %ss", settings_snapshot.cache_ttl_seconds)


@app.get("/healthz")
def health() -> Dict[str, str]:
    return {"status": "ok"}
