import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from infrastructure.mongo.session.client import DEFAULT_DB_NAME, DEFAULT_MONGO_URI
from infrastructure.peewee.session.db import DEFAULT_DATABASE_URL


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(slots=True)
class Settings:
    orm: str = "peewee"
    database_url: str = DEFAULT_DATABASE_URL
    mongo_uri: str = DEFAULT_MONGO_URI
    mongo_db_name: str = DEFAULT_DB_NAME
    seed_on_startup: bool = True
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = 5001
    reload: bool = True
    log_level: str = "info"


def load_settings() -> Settings:
    """
    Lee la configuración del entorno (y de ``.env`` si existe).
    """
    load_dotenv()
    return Settings(
        orm=os.getenv("ORM", "peewee").lower(),
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        mongo_uri=os.getenv("MONGO_URI", DEFAULT_MONGO_URI),
        mongo_db_name=os.getenv("MONGO_DB_NAME", DEFAULT_DB_NAME),
        seed_on_startup=_as_bool(os.getenv("SEED_ON_STARTUP", "true")),
        cors_origins=_as_list(os.getenv("CORS_ORIGINS", "*")),
        cors_allow_credentials=_as_bool(os.getenv("CORS_ALLOW_CREDENTIALS", "true")),
        cors_allow_methods=_as_list(os.getenv("CORS_ALLOW_METHODS", "*")),
        cors_allow_headers=_as_list(os.getenv("CORS_ALLOW_HEADERS", "*")),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5001")),
        reload=_as_bool(os.getenv("RELOAD", "true")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
