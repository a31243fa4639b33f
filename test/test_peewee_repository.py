import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from peewee import OperationalError

from core.domain.errors import StorageUnavailableError
from core.domain.models.task import (
    GroupField,
    Priority,
    SortBy,
    Status,
    TaskChanges,
    TaskDraft,
    TaskFilter,
)
from infrastructure.peewee.model.models import TaskModel
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository
from infrastructure.peewee.session.db import db, init_database


class PeeweeTaskRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        # Base de datos en memoria para cada test
        init_database("sqlite:///:memory:")
        self.repo = PeeweeTaskRepository()

    def tearDown(self) -> None:
        db.drop_tables([TaskModel])
        self.repo.close()

    def test_insert_and_find(self) -> None:
        due = datetime(2030, 5, 1, 9, 30, tzinfo=timezone.utc)
        task = self.repo.insert(
            TaskDraft(
                title="Peewee task",
                description="desc",
                priority=Priority.HIGH,
                status=Status.IN_PROGRESS,
                due_date=due,
            )
        )

        [loaded] = self.repo.find_many()

        self.assertEqual(loaded.id, task.id)
        self.assertEqual(loaded.title, "Peewee task")
        self.assertEqual(loaded.description, "desc")
        self.assertEqual(loaded.priority, Priority.HIGH)
        self.assertEqual(loaded.status, Status.IN_PROGRESS)
        self.assertEqual(loaded.due_date, due)
        self.assertEqual(loaded.created_at, task.created_at)
        self.assertEqual(loaded.updated_at, task.updated_at)

    def test_find_many_filters(self) -> None:
        self.repo.insert(TaskDraft(title="a", priority=Priority.HIGH))
        self.repo.insert(TaskDraft(title="b", priority=Priority.HIGH, status=Status.DONE))
        self.repo.insert(TaskDraft(title="c", priority=Priority.LOW))

        tasks = self.repo.find_many(TaskFilter(priority=Priority.HIGH, status=Status.TODO))

        self.assertEqual([t.title for t in tasks], ["a"])

    def test_find_many_sorted_by_priority_rank(self) -> None:
        for title, priority in [
            ("low", Priority.LOW),
            ("high-1", Priority.HIGH),
            ("medium", Priority.MEDIUM),
            ("high-2", Priority.HIGH),
        ]:
            self.repo.insert(TaskDraft(title=title, priority=priority))

        tasks = self.repo.find_many(sort_by=SortBy.PRIORITY)

        self.assertEqual([t.title for t in tasks], ["high-1", "high-2", "medium", "low"])

    def test_find_many_sorted_by_due_date(self) -> None:
        now = datetime.now(timezone.utc)
        self.repo.insert(TaskDraft(title="none"))
        self.repo.insert(TaskDraft(title="later", due_date=now + timedelta(days=3)))
        self.repo.insert(TaskDraft(title="soon", due_date=now + timedelta(hours=1)))

        tasks = self.repo.find_many(sort_by=SortBy.DUE_DATE)

        self.assertEqual([t.title for t in tasks], ["soon", "later", "none"])

    def test_update_by_id(self) -> None:
        task = self.repo.insert(TaskDraft(title="update me"))

        updated = self.repo.update_by_id(
            task.id, TaskChanges(status=Status.DONE, priority=Priority.LOW)
        )

        self.assertIsNotNone(updated)
        assert updated is not None
        self.assertEqual(updated.status, Status.DONE)
        self.assertEqual(updated.priority, Priority.LOW)
        self.assertEqual(updated.title, "update me")
        self.assertGreater(updated.updated_at, task.updated_at)

        [loaded] = self.repo.find_many()
        self.assertEqual(loaded.status, Status.DONE)
        self.assertEqual(loaded.updated_at, updated.updated_at)

    def test_update_missing_returns_none(self) -> None:
        self.assertIsNone(self.repo.update_by_id("missing", TaskChanges(status=Status.DONE)))

    def test_delete_by_id(self) -> None:
        task = self.repo.insert(TaskDraft(title="delete me"))

        deleted = self.repo.delete_by_id(task.id)

        self.assertIsNotNone(deleted)
        self.assertEqual(deleted.id, task.id)
        self.assertEqual(self.repo.find_many(), [])
        self.assertIsNone(self.repo.delete_by_id(task.id))

    def test_count_where_due_range(self) -> None:
        now = datetime(2030, 1, 10, 12, 0, tzinfo=timezone.utc)
        self.repo.insert(TaskDraft(title="in", due_date=now))
        self.repo.insert(TaskDraft(title="done", due_date=now, status=Status.DONE))
        self.repo.insert(TaskDraft(title="out", due_date=now + timedelta(days=10)))
        self.repo.insert(TaskDraft(title="undated"))

        count = self.repo.count_where(
            TaskFilter(
                exclude_status=Status.DONE,
                due_from=now - timedelta(days=1),
                due_to=now + timedelta(days=1),
            )
        )

        self.assertEqual(count, 1)
        self.assertEqual(self.repo.count_where(TaskFilter()), 4)

    def test_group_count_by(self) -> None:
        self.repo.insert(TaskDraft(title="a", priority=Priority.HIGH))
        self.repo.insert(TaskDraft(title="b", priority=Priority.HIGH, status=Status.DONE))
        self.repo.insert(TaskDraft(title="c", priority=Priority.LOW))

        self.assertEqual(
            self.repo.group_count_by(GroupField.PRIORITY), {"High": 2, "Low": 1}
        )
        self.assertEqual(
            self.repo.group_count_by(GroupField.STATUS), {"To Do": 2, "Done": 1}
        )

    def test_database_errors_become_storage_unavailable(self) -> None:
        with patch.object(TaskModel, "create", side_effect=OperationalError("locked")):
            with self.assertRaises(StorageUnavailableError):
                self.repo.insert(TaskDraft(title="x"))


if __name__ == "__main__":
    unittest.main()
