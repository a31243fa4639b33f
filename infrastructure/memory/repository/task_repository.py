import threading
from collections import Counter
from dataclasses import replace

from core.domain.models.task import (
    PRIORITY_RANK,
    GroupField,
    SortBy,
    Task,
    TaskChanges,
    TaskDraft,
    TaskFilter,
    apply_changes,
    build_task,
)
from core.domain.ports.task_repository import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    """
    Implementación de TaskRepository en memoria, protegida con un lock.

    Conserva el orden de inserción. Devuelve copias para que nadie fuera
    del repositorio mute las tareas almacenadas.
    """

    def __init__(self) -> None:
        self._data: dict[str, Task] = {}
        self._lock = threading.Lock()

    def insert(self, draft: TaskDraft) -> Task:
        task = build_task(draft)
        with self._lock:
            self._data[task.id] = task
        return replace(task)

    def find_many(
        self, filter: TaskFilter | None = None, sort_by: SortBy | None = None
    ) -> list[Task]:
        filter = filter or TaskFilter()
        with self._lock:
            tasks = [replace(t) for t in self._data.values() if filter.matches(t)]

        if sort_by == SortBy.PRIORITY:
            tasks.sort(key=lambda t: -PRIORITY_RANK[t.priority])
        elif sort_by == SortBy.DUE_DATE:
            tasks.sort(key=lambda t: (t.due_date is None, t.due_date or t.created_at))
        return tasks

    def update_by_id(self, task_id: str, changes: TaskChanges) -> Task | None:
        with self._lock:
            task = self._data.get(task_id)
            if task is None:
                return None
            return replace(apply_changes(task, changes))

    def delete_by_id(self, task_id: str) -> Task | None:
        with self._lock:
            return self._data.pop(task_id, None)

    def count_where(self, filter: TaskFilter) -> int:
        with self._lock:
            return sum(1 for t in self._data.values() if filter.matches(t))

    def group_count_by(self, field: GroupField) -> dict[str, int]:
        with self._lock:
            values = [getattr(t, field.value).value for t in self._data.values()]
        return dict(Counter(values))
