import logging
from contextlib import contextmanager
from typing import Any, Iterator

from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from core.domain.errors import StorageUnavailableError
from core.domain.models.task import (
    PRIORITY_RANK,
    GroupField,
    SortBy,
    Task,
    TaskChanges,
    TaskDraft,
    TaskFilter,
    build_task,
    utc_now,
)
from core.domain.ports.task_repository import TaskRepository
from infrastructure.mongo.models.task import TaskDocument
from infrastructure.mongo.session.client import (
    DEFAULT_DB_NAME,
    DEFAULT_MONGO_URI,
    create_client,
    get_tasks_collection,
)

logger = logging.getLogger(__name__)

# Prioridades de menor a mayor severidad; el índice en la lista es el rango
_PRIORITY_ORDER = [p.value for p in sorted(PRIORITY_RANK, key=PRIORITY_RANK.get)]


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.error(f"✗ MongoDB falló en {operation}: {e}")
        raise StorageUnavailableError(f"Storage error during {operation}: {e}") from e


class MongoTaskRepository(TaskRepository):
    """
    Implementación de TaskRepository usando MongoDB (Synchronous).
    """

    def __init__(
        self,
        collection: Collection[Any],
        client: MongoClient[Any] | None = None,
    ) -> None:
        self.collection = collection
        self._client = client

    @classmethod
    def connect(
        cls, mongo_uri: str = DEFAULT_MONGO_URI, db_name: str = DEFAULT_DB_NAME
    ) -> "MongoTaskRepository":
        """
        Crea el cliente, obtiene la colección y asegura los índices.

        Raises:
            StorageUnavailableError: Si MongoDB no responde.
        """
        client = create_client(mongo_uri)
        repository = cls(get_tasks_collection(client, db_name), client=client)
        repository.ensure_indexes()
        logger.info(f"✅ MongoDB conectado (db={db_name})")
        return repository

    def ensure_indexes(self) -> None:
        with _storage_errors("ensure_indexes"):
            self.collection.create_index([("status", ASCENDING), ("priority", ASCENDING)])
            self.collection.create_index([("dueDate", ASCENDING)])

    @staticmethod
    def _query(filter: TaskFilter) -> dict[str, Any]:
        query: dict[str, Any] = {}

        status: dict[str, Any] = {}
        if filter.status is not None:
            status["$eq"] = filter.status.value
        if filter.exclude_status is not None:
            status["$ne"] = filter.exclude_status.value
        if status:
            query["status"] = status

        if filter.priority is not None:
            query["priority"] = filter.priority.value

        due: dict[str, Any] = {}
        if filter.due_from is not None:
            due["$gte"] = filter.due_from
        if filter.due_to is not None:
            due["$lte"] = filter.due_to
        if due:
            query["dueDate"] = due
        return query

    @staticmethod
    def _sort_stages(sort_by: SortBy) -> list[dict[str, Any]]:
        if sort_by == SortBy.PRIORITY:
            return [
                {"$addFields": {"_rank": {"$indexOfArray": [_PRIORITY_ORDER, "$priority"]}}},
                {"$sort": {"_rank": -1, "createdAt": 1}},
                {"$project": {"_rank": 0}},
            ]
        # Las tareas sin fecha límite van al final
        return [
            {"$addFields": {"_noDue": {"$eq": [{"$ifNull": ["$dueDate", None]}, None]}}},
            {"$sort": {"_noDue": 1, "dueDate": 1, "createdAt": 1}},
            {"$project": {"_noDue": 0}},
        ]

    def insert(self, draft: TaskDraft) -> Task:
        """
        Inserta una tarea nueva.

        Argumentos:
            draft (TaskDraft): Campos de la tarea.

        Retorna:
            Task: La tarea creada, con id y marcas de tiempo.
        """
        task = build_task(draft)
        document = TaskDocument.from_domain(task).model_dump(by_alias=True)
        with _storage_errors("insert"):
            self.collection.insert_one(document)
        return task

    def find_many(
        self, filter: TaskFilter | None = None, sort_by: SortBy | None = None
    ) -> list[Task]:
        query = self._query(filter or TaskFilter())
        with _storage_errors("find_many"):
            if sort_by is None:
                docs = self.collection.find(query)
            else:
                docs = self.collection.aggregate(
                    [{"$match": query}, *self._sort_stages(sort_by)]
                )
            return [TaskDocument(**doc).to_domain() for doc in docs]

    def update_by_id(self, task_id: str, changes: TaskChanges) -> Task | None:
        """
        Actualiza ``status`` y/o ``priority`` de forma atómica.

        ``updatedAt`` se calcula en el servidor como el máximo entre ahora y
        el valor anterior más 1 ms, de modo que siempre crece.
        """
        fields: dict[str, Any] = {}
        if changes.status is not None:
            fields["status"] = changes.status.value
        if changes.priority is not None:
            fields["priority"] = changes.priority.value
        fields["updatedAt"] = {"$max": [utc_now(), {"$add": ["$updatedAt", 1]}]}

        with _storage_errors("update_by_id"):
            doc = self.collection.find_one_and_update(
                {"_id": task_id},
                [{"$set": fields}],
                return_document=ReturnDocument.AFTER,
            )
        if not doc:
            return None
        return TaskDocument(**doc).to_domain()

    def delete_by_id(self, task_id: str) -> Task | None:
        with _storage_errors("delete_by_id"):
            doc = self.collection.find_one_and_delete({"_id": task_id})
        if not doc:
            return None
        return TaskDocument(**doc).to_domain()

    def count_where(self, filter: TaskFilter) -> int:
        with _storage_errors("count_where"):
            return self.collection.count_documents(self._query(filter))

    def group_count_by(self, field: GroupField) -> dict[str, int]:
        pipeline = [{"$group": {"_id": f"${field.value}", "count": {"$sum": 1}}}]
        with _storage_errors("group_count_by"):
            groups = list(self.collection.aggregate(pipeline))
        return {g["_id"]: g["count"] for g in groups if g["_id"] is not None}

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
