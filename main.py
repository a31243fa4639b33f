import logging

import uvicorn

from infrastructure.config import load_settings
from infrastructure.logging_setup import configure_logging, logging_config

logger = logging.getLogger(__name__)


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    logger.info(
        f"Starting server at http://{settings.host}:{settings.port} "
        f"(Reload: {settings.reload})"
    )

    uvicorn.run(
        "backend_fastapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level,
        log_config=logging_config(settings.log_level),
    )


if __name__ == "__main__":
    run()
