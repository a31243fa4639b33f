from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from core.domain.models.task import Priority, Status


class CamelModel(BaseModel):
    """Entrada y salida JSON en camelCase (``dueDate``, ``createdAt``...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TaskCreateIn(CamelModel):
    # Opcional aquí: el caso de uso responde "Title is required" con un 400
    title: str | None = None
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    status: Status = Status.TODO


class TaskUpdateIn(CamelModel):
    """Solo ``status`` y ``priority``; cualquier otro campo se ignora."""

    status: Status | None = None
    priority: Priority | None = None

    @field_validator("status", "priority", mode="before")
    @classmethod
    def blank_as_unset(cls, value: object) -> object:
        # "" equivale a no enviar el campo
        return None if value == "" else value


class TaskOut(CamelModel):
    id: str
    title: str
    description: str
    priority: Priority
    due_date: datetime | None = None
    status: Status
    created_at: datetime
    updated_at: datetime


class TaskDeletedOut(CamelModel):
    message: str
    task: TaskOut


class PriorityBreakdownOut(CamelModel):
    high: int
    medium: int
    low: int


class StatusBreakdownOut(CamelModel):
    open: int
    in_progress: int
    completed: int


class InsightsOut(CamelModel):
    summary: str
    by_priority: PriorityBreakdownOut
    by_status: StatusBreakdownOut
    total_tasks: int
