from datetime import datetime, timezone

from core.domain.models.task import GroupField, Status, TaskDraft, TaskFilter
from infrastructure.memory.repository.task_repository import InMemoryTaskRepository
from infrastructure.seed import example_tasks, seed_if_empty

NOW = datetime(2030, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_seed_inserts_six_example_tasks():
    repo = InMemoryTaskRepository()

    inserted = seed_if_empty(repo, now=NOW)

    assert inserted == 6
    assert repo.count_where(TaskFilter()) == 6
    assert repo.group_count_by(GroupField.PRIORITY) == {"High": 3, "Medium": 2, "Low": 1}


def test_seed_runs_only_once():
    repo = InMemoryTaskRepository()

    seed_if_empty(repo, now=NOW)
    assert seed_if_empty(repo, now=NOW) == 0
    assert repo.count_where(TaskFilter()) == 6


def test_seed_skips_store_with_data():
    repo = InMemoryTaskRepository()
    repo.insert(TaskDraft(title="existing"))

    assert seed_if_empty(repo, now=NOW) == 0
    assert [t.title for t in repo.find_many()] == ["existing"]


def test_example_due_dates_are_relative_to_now():
    drafts = {d.title: d for d in example_tasks(NOW)}

    assert drafts["Fix login bug"].due_date == datetime(2030, 6, 2, 12, 0, tzinfo=timezone.utc)
    assert drafts["Update user documentation"].status == Status.DONE
    assert drafts["Review team pull requests"].due_date is None
