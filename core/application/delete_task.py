from dataclasses import dataclass

from core.domain.errors import NotFoundError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class DeleteTaskCommand:
    id: str


class DeleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: DeleteTaskCommand) -> Task:
        task = self._repository.delete_by_id(cmd.id)
        if task is None:
            raise NotFoundError("Task not found")
        return task
