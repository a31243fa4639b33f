import logging
from datetime import datetime, timedelta

from core.domain.models.task import Priority, Status, TaskDraft, TaskFilter, utc_now
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def example_tasks(now: datetime) -> list[TaskDraft]:
    """Tareas de ejemplo; las fechas límite son relativas a ``now``."""
    day = timedelta(days=1)
    return [
        TaskDraft(
            title="Design the new homepage",
            description="Create mockups in Figma for the v2 homepage.",
            priority=Priority.HIGH,
            status=Status.IN_PROGRESS,
            due_date=now + 2 * day,
        ),
        TaskDraft(
            title="Fix login bug",
            description="User cannot reset password.",
            priority=Priority.HIGH,
            status=Status.TODO,
            due_date=now + day,
        ),
        TaskDraft(
            title="Write blog post about AI",
            description="Draft a 500-word article on new AI trends.",
            priority=Priority.MEDIUM,
            status=Status.TODO,
            due_date=now + 7 * day,
        ),
        TaskDraft(
            title="Deploy backend to production",
            description="Push latest changes to the live server.",
            priority=Priority.HIGH,
            status=Status.TODO,
            due_date=now + 3 * day,
        ),
        TaskDraft(
            title="Update user documentation",
            description="Add new section for the task tracker feature.",
            priority=Priority.LOW,
            status=Status.DONE,
            due_date=now - 5 * day,
        ),
        TaskDraft(
            title="Review team pull requests",
            priority=Priority.MEDIUM,
            status=Status.IN_PROGRESS,
        ),
    ]


def seed_if_empty(repository: TaskRepository, now: datetime | None = None) -> int:
    """
    Inserta las tareas de ejemplo solo si el almacenamiento está vacío.

    Returns:
        Número de tareas insertadas (0 si ya había datos).
    """
    if repository.count_where(TaskFilter()) > 0:
        return 0

    logger.info("🌱 No hay tareas. Insertando datos de ejemplo...")
    drafts = example_tasks(now or utc_now())
    for draft in drafts:
        repository.insert(draft)
    logger.info(f"✅ {len(drafts)} tareas de ejemplo añadidas")
    return len(drafts)
