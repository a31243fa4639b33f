from typing import Any

from pymongo import MongoClient
from pymongo.collection import Collection

DEFAULT_MONGO_URI = "mongodb://localhost:27017"
DEFAULT_DB_NAME = "task_tracker"
SERVER_SELECTION_TIMEOUT_MS = 5000


def create_client(mongo_uri: str = DEFAULT_MONGO_URI) -> MongoClient[Any]:
    """
    Crea el cliente de MongoDB.

    ``tz_aware`` hace que las fechas vuelvan con zona horaria UTC.
    """
    return MongoClient(
        mongo_uri,
        tz_aware=True,
        serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
    )


def get_tasks_collection(
    client: MongoClient[Any], db_name: str = DEFAULT_DB_NAME
) -> Collection[Any]:
    """
    Obtiene la colección de tareas.

    Retorna:
        Collection: La colección ``tasks`` de la base de datos indicada.
    """
    return client[db_name].tasks
