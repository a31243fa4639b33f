import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable

from core.domain.insights import Insights, build_insights, due_soon_window
from core.domain.models.task import GroupField, Status, TaskFilter
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)

# Pool compartido: las cuatro lecturas de insights son independientes entre sí
executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="Insights")


def local_now() -> datetime:
    """Hora local del servidor, sin zona horaria (hora de reloj)."""
    return datetime.now()


def local_to_utc(value: datetime) -> datetime:
    """
    Convierte a UTC; una fecha sin zona se interpreta como hora local del
    servidor, con el desfase vigente en esa fecha (horario de verano).
    """
    return value.astimezone().astimezone(timezone.utc)


class GetInsightsUseCase:
    def __init__(
        self,
        repository: TaskRepository,
        clock: Callable[[], datetime] = local_now,
        pool: Executor | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._pool = pool or executor

    def execute(self) -> Insights:
        """
        Calcula el resumen actual. No modifica el almacenamiento.

        Raises:
            StorageUnavailableError: Si alguna de las lecturas falla.
        """
        start, end = due_soon_window(self._clock())
        due_soon = TaskFilter(
            exclude_status=Status.DONE,
            due_from=local_to_utc(start),
            due_to=local_to_utc(end),
        )

        future_total = self._pool.submit(self._repository.count_where, TaskFilter())
        future_priority = self._pool.submit(
            self._repository.group_count_by, GroupField.PRIORITY
        )
        future_status = self._pool.submit(
            self._repository.group_count_by, GroupField.STATUS
        )
        future_due_soon = self._pool.submit(self._repository.count_where, due_soon)

        insights = build_insights(
            total_tasks=future_total.result(),
            priority_groups=future_priority.result(),
            status_groups=future_status.result(),
            total_due_soon=future_due_soon.result(),
        )
        logger.debug(
            f"📊 Insights: {insights.total_tasks} tareas, "
            f"{insights.total_due_soon} vencen pronto"
        )
        return insights
