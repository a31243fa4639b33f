import pytest

from infrastructure.config import Settings, load_settings
from infrastructure.container import build_task_repository
from infrastructure.memory.repository.task_repository import InMemoryTaskRepository
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("ORM", "Mongo")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("SEED_ON_STARTUP", "no")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    settings = load_settings()

    assert settings.orm == "mongo"
    assert settings.port == 9000
    assert settings.seed_on_startup is False
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_load_settings_defaults(monkeypatch):
    for name in ("ORM", "PORT", "SEED_ON_STARTUP", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.orm == "peewee"
    assert settings.port == 5001
    assert settings.seed_on_startup is True
    assert settings.cors_origins == ["*"]


def test_build_memory_repository():
    repository = build_task_repository(Settings(orm="memory"))

    assert isinstance(repository, InMemoryTaskRepository)


@pytest.mark.parametrize("orm", ["peewee", "unknown"])
def test_build_peewee_repository(orm):
    repository = build_task_repository(
        Settings(orm=orm, database_url="sqlite:///:memory:")
    )
    try:
        assert isinstance(repository, PeeweeTaskRepository)
    finally:
        repository.close()
