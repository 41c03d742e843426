"""Start the HTTP API under uvicorn."""
import logging

import uvicorn

from assethub.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    logger.info("Serving assethub on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(
        "assethub.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.APP_DEBUG,
    )


if __name__ == "__main__":
    main()
