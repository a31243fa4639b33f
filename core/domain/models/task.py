from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TypeVar
from uuid import uuid4

from core.domain.errors import ValidationError

E = TypeVar("E", bound=Enum)


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Status(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class SortBy(str, Enum):
    DUE_DATE = "dueDate"
    PRIORITY = "priority"


class GroupField(str, Enum):
    PRIORITY = "priority"
    STATUS = "status"


# Orden de severidad explícito (no lexicográfico): High > Medium > Low
PRIORITY_RANK: dict[Priority, int] = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
}


@dataclass(slots=True)
class Task:
    id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    status: Status = Status.TODO


@dataclass(slots=True)
class TaskDraft:
    """Campos de una tarea aún no persistida."""

    title: str
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    status: Status = Status.TODO


@dataclass(slots=True)
class TaskChanges:
    """Actualización parcial: solo ``status`` y ``priority`` son mutables."""

    status: Status | None = None
    priority: Priority | None = None


@dataclass(slots=True, frozen=True)
class TaskFilter:
    """
    Predicado sobre tareas, usado por ``find_many`` y ``count_where``.

    Los rangos de fecha son inclusivos; una tarea sin ``due_date`` nunca
    cumple un rango.
    """

    status: Status | None = None
    priority: Priority | None = None
    exclude_status: Status | None = None
    due_from: datetime | None = None
    due_to: datetime | None = None

    @property
    def has_due_range(self) -> bool:
        return self.due_from is not None or self.due_to is not None

    def matches(self, task: Task) -> bool:
        if self.status is not None and task.status != self.status:
            return False
        if self.priority is not None and task.priority != self.priority:
            return False
        if self.exclude_status is not None and task.status == self.exclude_status:
            return False
        if self.has_due_range:
            if task.due_date is None:
                return False
            if self.due_from is not None and task.due_date < self.due_from:
                return False
            if self.due_to is not None and task.due_date > self.due_to:
                return False
        return True


def parse_enum(enum_cls: type[E], value: E | str | None, field_name: str) -> E | None:
    """
    Convierte ``value`` al miembro de ``enum_cls`` correspondiente.

    Raises:
        ValidationError: Si el valor no pertenece a la enumeración.
    """
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {field_name} '{value}'. Allowed values: {allowed}"
        ) from None


def utc_now() -> datetime:
    """Hora actual en UTC, truncada a milisegundos (precisión de BSON)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def as_utc(value: datetime | None) -> datetime | None:
    """Normaliza a UTC; una fecha sin zona horaria se interpreta como UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_updated_at(previous: datetime) -> datetime:
    """Nuevo ``updated_at``, siempre estrictamente mayor que el anterior."""
    now = utc_now()
    if now <= previous:
        return previous + timedelta(milliseconds=1)
    return now


def build_task(draft: TaskDraft, now: datetime | None = None) -> Task:
    """
    Crea la entidad a partir de un borrador, validando el título.

    Raises:
        ValidationError: Si el título está vacío o solo contiene espacios.
    """
    title = (draft.title or "").strip()
    if not title:
        raise ValidationError("Title is required")

    timestamp = now or utc_now()
    return Task(
        id=str(uuid4()),
        title=title,
        description=(draft.description or "").strip(),
        priority=Priority(draft.priority),
        due_date=as_utc(draft.due_date),
        status=Status(draft.status),
        created_at=timestamp,
        updated_at=timestamp,
    )


def apply_changes(task: Task, changes: TaskChanges) -> Task:
    """Aplica ``changes`` sobre ``task`` y refresca ``updated_at``."""
    if changes.status is not None:
        task.status = changes.status
    if changes.priority is not None:
        task.priority = changes.priority
    task.updated_at = next_updated_at(task.updated_at)
    return task
