import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from backend_fastapi.api.routes.insights import router as insights_router
from backend_fastapi.api.routes.tasks import router as tasks_router
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import Settings, load_settings
from infrastructure.container import build_task_repository
from infrastructure.seed import seed_if_empty

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    repository: TaskRepository | None = None,
) -> FastAPI:
    """
    Construye la aplicación.

    Ciclo de vida: obtener el repositorio → sembrar si está vacío →
    servir → cerrar la conexión.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        repo = repository or build_task_repository(settings)
        if settings.seed_on_startup:
            seed_if_empty(repo)
        app.state.task_repository = repo
        logger.info(f"🚀 Task Tracker listo (ORM={settings.orm})")
        try:
            yield
        finally:
            repo.close()
            logger.info("👋 Conexión al almacenamiento cerrada")

    app = FastAPI(title="Task Tracker API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(tasks_router, prefix="/api")
    app.include_router(insights_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root() -> str:
        return "✅ Task Tracker Backend is running!"

    return app


app = create_app()
