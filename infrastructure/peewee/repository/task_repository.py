import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from peewee import Case, DatabaseError, InterfaceError, fn

from core.domain.errors import StorageUnavailableError
from core.domain.models.task import (
    PRIORITY_RANK,
    GroupField,
    Priority,
    SortBy,
    Status,
    Task,
    TaskChanges,
    TaskDraft,
    TaskFilter,
    apply_changes,
    build_task,
)
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.session.db import db

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """
    Abre la conexión del hilo actual si hace falta y la cierra al terminar.

    Traduce los errores del driver a ``StorageUnavailableError``.
    """
    try:
        opened = db.connect(reuse_if_open=True)
        try:
            yield
        finally:
            if opened:
                db.close()
    except (DatabaseError, InterfaceError) as e:
        logger.error(f"✗ Peewee falló en {operation}: {e}")
        raise StorageUnavailableError(f"Storage error during {operation}: {e}") from e


def _to_db(value: datetime | None) -> datetime | None:
    # Se guarda en UTC sin zona horaria
    if value is None:
        return None
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_db(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


class PeeweeTaskRepository(TaskRepository):
    def __init__(self) -> None:
        # Sin migraciones: la tabla se crea al iniciar si no existe.
        with _storage_errors("init"):
            db.create_tables([TaskModel], safe=True)

    @staticmethod
    def _to_domain(row: TaskModel) -> Task:
        return Task(
            id=row.task_id,
            title=row.title,
            description=row.description,
            priority=Priority(row.priority),
            due_date=_from_db(row.due_date),
            status=Status(row.status),
            created_at=_from_db(row.created_at),
            updated_at=_from_db(row.updated_at),
        )

    @staticmethod
    def _where(filter: TaskFilter) -> list:
        clauses = []
        if filter.status is not None:
            clauses.append(TaskModel.status == filter.status.value)
        if filter.priority is not None:
            clauses.append(TaskModel.priority == filter.priority.value)
        if filter.exclude_status is not None:
            clauses.append(TaskModel.status != filter.exclude_status.value)
        if filter.due_from is not None:
            clauses.append(TaskModel.due_date >= _to_db(filter.due_from))
        if filter.due_to is not None:
            clauses.append(TaskModel.due_date <= _to_db(filter.due_to))
        return clauses

    def insert(self, draft: TaskDraft) -> Task:
        task = build_task(draft)
        with _storage_errors("insert"):
            TaskModel.create(
                task_id=task.id,
                title=task.title,
                description=task.description,
                priority=task.priority.value,
                due_date=_to_db(task.due_date),
                status=task.status.value,
                created_at=_to_db(task.created_at),
                updated_at=_to_db(task.updated_at),
            )
        return task

    def find_many(
        self, filter: TaskFilter | None = None, sort_by: SortBy | None = None
    ) -> list[Task]:
        query = TaskModel.select()
        clauses = self._where(filter or TaskFilter())
        if clauses:
            query = query.where(*clauses)

        if sort_by == SortBy.PRIORITY:
            rank = Case(
                TaskModel.priority,
                [(priority.value, value) for priority, value in PRIORITY_RANK.items()],
                0,
            )
            query = query.order_by(rank.desc(), TaskModel.seq)
        elif sort_by == SortBy.DUE_DATE:
            query = query.order_by(
                TaskModel.due_date.is_null(), TaskModel.due_date, TaskModel.seq
            )
        else:
            query = query.order_by(TaskModel.seq)

        with _storage_errors("find_many"):
            return [self._to_domain(row) for row in query]

    def update_by_id(self, task_id: str, changes: TaskChanges) -> Task | None:
        with _storage_errors("update_by_id"), db.atomic():
            row = TaskModel.get_or_none(TaskModel.task_id == task_id)
            if row is None:
                return None

            task = apply_changes(self._to_domain(row), changes)
            row.status = task.status.value
            row.priority = task.priority.value
            row.updated_at = _to_db(task.updated_at)
            row.save()
            return task

    def delete_by_id(self, task_id: str) -> Task | None:
        with _storage_errors("delete_by_id"), db.atomic():
            row = TaskModel.get_or_none(TaskModel.task_id == task_id)
            if row is None:
                return None
            task = self._to_domain(row)
            row.delete_instance()
            return task

    def count_where(self, filter: TaskFilter) -> int:
        query = TaskModel.select()
        clauses = self._where(filter)
        if clauses:
            query = query.where(*clauses)
        with _storage_errors("count_where"):
            return query.count()

    def group_count_by(self, field: GroupField) -> dict[str, int]:
        column = getattr(TaskModel, field.value)
        query = (
            TaskModel.select(column, fn.COUNT(TaskModel.seq))
            .group_by(column)
            .tuples()
        )
        with _storage_errors("group_count_by"):
            return {value: count for value, count in query if value is not None}

    def close(self) -> None:
        """Cierra la conexión de este hilo o la compartida de SQLite en memoria."""
        if not db.is_closed():
            db.close()
