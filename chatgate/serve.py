"""
Run the API server:

  python -m chatgate.serve

Listens on HOST:PORT from the environment (default 0.0.0.0:3000).
"""

import logging
import sys
import time

import uvicorn

from chatgate.core.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
# Timestamps are labelled Z, so render them in UTC.
logging.Formatter.converter = time.gmtime
logger = logging.getLogger(__name__)


def main() -> int:
    """Start uvicorn with the ASGI app chatgate.main:app."""
    settings = get_settings()
    logger.info("Server running on port %s", settings.PORT)
    uvicorn.run(
        "chatgate.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
