import logging
from urllib.parse import urlparse

from peewee import Database, DatabaseProxy
from playhouse.db_url import connect, parse

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///tasks.db"

# Se inicializa en el arranque con la URL configurada
db = DatabaseProxy()


def is_in_memory_sqlite(database_url: str) -> bool:
    scheme = urlparse(database_url).scheme
    if not scheme.startswith("sqlite"):
        return False
    return parse(database_url).get("database") in ("", ":memory:")


def init_database(database_url: str = DEFAULT_DATABASE_URL) -> Database:
    """
    Conecta el proxy a la base de datos indicada por ``database_url``.

    Acepta cualquier URL de ``playhouse.db_url`` (sqlite, postgres, mysql).
    Cada hilo abre y cierra su propia conexión por operación, salvo con
    SQLite en memoria: ahí todos los hilos comparten una única conexión,
    abierta aquí y cerrada por ``PeeweeTaskRepository.close``.
    """
    if is_in_memory_sqlite(database_url):
        database = connect(database_url, thread_safe=False, check_same_thread=False)
        database.connect()
    else:
        database = connect(database_url)
    db.initialize(database)
    logger.info(f"🗄️ Peewee inicializado con {database_url.split('://', 1)[0]}")
    return database
