from dataclasses import dataclass
from datetime import datetime

from core.domain.models.task import Priority, Status, Task, TaskDraft, parse_enum
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class CreateTaskCommand:
    title: str | None = None
    description: str | None = None
    priority: Priority | str = Priority.MEDIUM
    due_date: datetime | None = None
    status: Status | str = Status.TODO


class CreateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: CreateTaskCommand) -> Task:
        draft = TaskDraft(
            title=cmd.title or "",
            description=cmd.description,
            priority=parse_enum(Priority, cmd.priority or None, "priority") or Priority.MEDIUM,
            due_date=cmd.due_date,
            status=parse_enum(Status, cmd.status or None, "status") or Status.TODO,
        )
        return self._repository.insert(draft)
