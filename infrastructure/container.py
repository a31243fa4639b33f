import logging

from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.get_insights import GetInsightsUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import Settings
from infrastructure.memory.repository.task_repository import InMemoryTaskRepository
from infrastructure.mongo.repository.task_repository import MongoTaskRepository
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository
from infrastructure.peewee.session.db import init_database

logger = logging.getLogger(__name__)


def build_task_repository(settings: Settings) -> TaskRepository:
    orm = settings.orm

    if orm == "mongo":
        return MongoTaskRepository.connect(settings.mongo_uri, settings.mongo_db_name)
    elif orm == "memory":
        logger.warning("⚠️ Usando almacenamiento en memoria: los datos no persisten")
        return InMemoryTaskRepository()
    elif orm != "peewee":
        logger.warning(f"⚠️ ORM desconocido '{orm}', usando Peewee")
    # Default to Peewee
    init_database(settings.database_url)
    return PeeweeTaskRepository()


def get_create_task_use_case(repository: TaskRepository) -> CreateTaskUseCase:
    return CreateTaskUseCase(repository=repository)


def get_update_task_use_case(repository: TaskRepository) -> UpdateTaskUseCase:
    return UpdateTaskUseCase(repository=repository)


def get_delete_task_use_case(repository: TaskRepository) -> DeleteTaskUseCase:
    return DeleteTaskUseCase(repository=repository)


def get_list_tasks_use_case(repository: TaskRepository) -> ListTasksUseCase:
    return ListTasksUseCase(repository=repository)


def get_insights_use_case(repository: TaskRepository) -> GetInsightsUseCase:
    return GetInsightsUseCase(repository=repository)
