"""
Agregación de insights sobre la población actual de tareas.

Todo el cálculo es puro: recibe los conteos leídos del repositorio y
produce el resumen. Las lecturas concurrentes viven en
``core.application.get_insights``.
"""

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta

DUE_SOON_DAYS = 3

EMPTY_SUMMARY = "No tasks yet. Add one to get started!"
ALL_CLEAR_SUMMARY = "🎉 You're all clear! No open tasks."

_PRIORITY_KEYS = ("high", "medium", "low")


@dataclass(slots=True)
class PriorityBreakdown:
    high: int = 0
    medium: int = 0
    low: int = 0

    def items(self) -> list[tuple[str, int]]:
        """Pares (clave, conteo) en el orden fijo high, medium, low."""
        return [(key, getattr(self, key)) for key in _PRIORITY_KEYS]


@dataclass(slots=True)
class StatusBreakdown:
    open: int = 0
    in_progress: int = 0
    completed: int = 0


@dataclass(slots=True)
class Insights:
    summary: str
    total_tasks: int
    total_due_soon: int
    by_priority: PriorityBreakdown = field(default_factory=PriorityBreakdown)
    by_status: StatusBreakdown = field(default_factory=StatusBreakdown)


def due_soon_window(now: datetime) -> tuple[datetime, datetime]:
    """
    Ventana "vence pronto": desde la medianoche de hoy hasta las
    23:59:59.999 de dentro de tres días, ambos extremos incluidos.

    Los extremos son horas de reloj en la zona de ``now``: si ``now`` no
    tiene zona, tampoco la tienen los extremos, y quien llama los localiza.
    """
    today = now.date()
    start = datetime.combine(today, time.min, tzinfo=now.tzinfo)
    end = datetime.combine(
        today + timedelta(days=DUE_SOON_DAYS),
        time(23, 59, 59, 999000),
        tzinfo=now.tzinfo,
    )
    return start, end


def priority_breakdown(groups: dict[str, int]) -> PriorityBreakdown:
    """Claves desconocidas se descartan; nunca se añaden claves nuevas."""
    breakdown = PriorityBreakdown()
    for value, count in groups.items():
        key = value.lower()
        if key in _PRIORITY_KEYS:
            setattr(breakdown, key, getattr(breakdown, key) + count)
    return breakdown


def classify_status(value: str) -> str:
    """
    Clasifica un estado por subcadena, no por igualdad exacta.

    Cualquier estado cuyo nombre contenga "progress" cuenta como en curso,
    "done" o "complete" como completado, y el resto como abierto.
    """
    key = value.lower()
    if "progress" in key:
        return "in_progress"
    if "done" in key or "complete" in key:
        return "completed"
    return "open"


def status_breakdown(groups: dict[str, int]) -> StatusBreakdown:
    breakdown = StatusBreakdown()
    for value, count in groups.items():
        bucket = classify_status(value)
        setattr(breakdown, bucket, getattr(breakdown, bucket) + count)
    return breakdown


def top_priority(by_priority: PriorityBreakdown) -> str | None:
    """Primera clave con el conteo máximo (empates: high, medium, low)."""
    best_key, best_count = None, 0
    for key, count in by_priority.items():
        if count > best_count:
            best_key, best_count = key, count
    return best_key


def _plural(count: int, singular: str, plural: str) -> str:
    return plural if count > 1 else singular


def build_summary(
    total_tasks: int,
    by_priority: PriorityBreakdown,
    by_status: StatusBreakdown,
    total_due_soon: int,
) -> str:
    if total_tasks == 0:
        return EMPTY_SUMMARY

    total_open = by_status.open
    if total_open == 0:
        return ALL_CLEAR_SUMMARY

    summary = f"You have {total_open} pending task{_plural(total_open, '', 's')}."

    top = top_priority(by_priority)
    if top is not None:
        summary += f" Most are {top}-priority tasks."

    if total_due_soon > 0:
        verb = _plural(total_due_soon, "is", "are")
        summary += f" ⚠️ {total_due_soon} {verb} due in the next {DUE_SOON_DAYS} days!"
    else:
        summary += " Nothing is due immediately."
    return summary


def build_insights(
    total_tasks: int,
    priority_groups: dict[str, int],
    status_groups: dict[str, int],
    total_due_soon: int,
) -> Insights:
    by_priority = priority_breakdown(priority_groups)
    by_status = status_breakdown(status_groups)
    return Insights(
        summary=build_summary(total_tasks, by_priority, by_status, total_due_soon),
        total_tasks=total_tasks,
        total_due_soon=total_due_soon,
        by_priority=by_priority,
        by_status=by_status,
    )
