import logging
import logging.config
from typing import Any

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def logging_config(level: str = "info") -> dict[str, Any]:
    """
    Configuración para ``logging.config.dictConfig``: logger raíz con un
    único handler a stderr.

    Se entrega también a uvicorn (``log_config``), que la aplica en cada
    proceso worker, incluido el que lanza el modo recarga.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"level": level.upper(), "handlers": ["stderr"]},
    }


def configure_logging(level: str = "info") -> None:
    """Configura el logger raíz en el proceso actual."""
    logging.config.dictConfig(logging_config(level))
    logging.captureWarnings(True)
