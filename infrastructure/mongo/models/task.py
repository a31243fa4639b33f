from datetime import datetime

from pydantic import BaseModel, Field

from core.domain.models.task import Priority, Status, Task, as_utc


class TaskDocument(BaseModel):
    """
    Modelo de Task para MongoDB.
    Representa cómo se almacena la tarea en la colección ``tasks``.
    """

    id: str = Field(alias="_id")
    title: str
    description: str | None = ""
    priority: str = Priority.MEDIUM.value
    due_date: datetime | None = Field(default=None, alias="dueDate")
    status: str = Status.TODO.value
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> Task:
        """
        Convierte el documento de MongoDB al modelo de dominio.

        Retorna:
            Task: La entidad de dominio.
        """
        return Task(
            id=self.id,
            title=self.title,
            description=self.description or "",
            priority=Priority(self.priority),
            due_date=as_utc(self.due_date),
            status=Status(self.status),
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
        )

    @classmethod
    def from_domain(cls, task: Task) -> "TaskDocument":
        """
        Crea un TaskDocument a partir de una entidad de dominio.

        Argumentos:
            task (Task): La entidad de dominio.

        Retorna:
            TaskDocument: El documento de MongoDB.
        """
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority.value,
            due_date=task.due_date,
            status=task.status.value,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
