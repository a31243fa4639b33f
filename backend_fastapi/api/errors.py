import logging

from fastapi import HTTPException, status

from core.domain.errors import (
    NotFoundError,
    StorageUnavailableError,
    TaskError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def http_error(error: TaskError) -> HTTPException:
    """Traduce un error de dominio a la respuesta HTTP correspondiente."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, StorageUnavailableError):
        logger.error(f"❌ Almacenamiento no disponible: {error.message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message
    )
