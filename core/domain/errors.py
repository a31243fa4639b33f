class TaskError(Exception):
    """Error base del dominio. Siempre lleva un mensaje legible."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    """Campo requerido ausente o valor de enumeración inválido."""


class NotFoundError(TaskError):
    """La operación apunta a una tarea inexistente."""


class StorageUnavailableError(TaskError):
    """El almacenamiento no responde o falló por causas de infraestructura."""
