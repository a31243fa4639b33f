from dataclasses import dataclass

from core.domain.errors import NotFoundError
from core.domain.models.task import Priority, Status, Task, TaskChanges, parse_enum
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class UpdateTaskCommand:
    status: Status | str | None = None
    priority: Priority | str | None = None


class UpdateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: str, cmd: UpdateTaskCommand) -> Task:
        changes = TaskChanges(
            status=parse_enum(Status, cmd.status or None, "status"),
            priority=parse_enum(Priority, cmd.priority or None, "priority"),
        )
        task = self._repository.update_by_id(task_id, changes)
        if task is None:
            raise NotFoundError("Task not found")
        return task
