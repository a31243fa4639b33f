from abc import ABC, abstractmethod

from core.domain.models.task import (
    GroupField,
    SortBy,
    Task,
    TaskChanges,
    TaskDraft,
    TaskFilter,
)


class TaskRepository(ABC):
    @abstractmethod
    def insert(self, draft: TaskDraft) -> Task:
        raise NotImplementedError

    @abstractmethod
    def find_many(
        self, filter: TaskFilter | None = None, sort_by: SortBy | None = None
    ) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def update_by_id(self, task_id: str, changes: TaskChanges) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, task_id: str) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def count_where(self, filter: TaskFilter) -> int:
        raise NotImplementedError

    @abstractmethod
    def group_count_by(self, field: GroupField) -> dict[str, int]:
        raise NotImplementedError

    def close(self) -> None:
        """Libera la conexión subyacente, si la hay."""
        return None
