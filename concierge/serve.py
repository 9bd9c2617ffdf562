"""Launch the concierge HTTP service under Uvicorn."""

from __future__ import annotations

import logging
import os

import uvicorn

from concierge.core.config import get_settings
from concierge.core.logging import configure_logging

logger = logging.getLogger("concierge.launcher")


def main() -> None:
    settings = get_settings()
    configure_logging(settings)

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    logger.info("Starting %s on %s:%d", settings.app_name, host, port)
    uvicorn.run("concierge.main:app", host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
