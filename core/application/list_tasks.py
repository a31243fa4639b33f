from dataclasses import dataclass

from core.domain.models.task import Priority, SortBy, Status, Task, TaskFilter, parse_enum
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class ListTasksCommand:
    status: Status | str | None = None
    priority: Priority | str | None = None
    sort_by: SortBy | str | None = None


class ListTasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: ListTasksCommand | None = None) -> list[Task]:
        cmd = cmd or ListTasksCommand()
        filter = TaskFilter(
            status=parse_enum(Status, cmd.status or None, "status"),
            priority=parse_enum(Priority, cmd.priority or None, "priority"),
        )
        return self._repository.find_many(filter, self._sort_by(cmd.sort_by))

    @staticmethod
    def _sort_by(value: SortBy | str | None) -> SortBy | None:
        # Un criterio de orden desconocido se ignora: sin orden.
        try:
            return SortBy(value) if value else None
        except ValueError:
            return None
