from fastapi import APIRouter, Depends, Query, status

from backend_fastapi.api.deps import (
    create_task_use_case,
    delete_task_use_case,
    list_tasks_use_case,
    update_task_use_case,
)
from backend_fastapi.api.errors import http_error
from backend_fastapi.api.schemas import TaskCreateIn, TaskDeletedOut, TaskOut, TaskUpdateIn
from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.errors import TaskError
from core.domain.models.task import Task

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Crear una nueva tarea",
)
def create_task(
    body: TaskCreateIn,
    use_case: CreateTaskUseCase = Depends(create_task_use_case),
) -> Task:
    """
    Crea una nueva tarea en el sistema.

    - **title**: Título de la tarea (obligatorio).
    - **description**: Descripción opcional.
    - **priority**: Low, Medium (por defecto) o High.
    - **dueDate**: Fecha límite opcional.
    - **status**: Estado inicial (por defecto To Do).
    """
    try:
        return use_case.execute(
            CreateTaskCommand(
                title=body.title,
                description=body.description,
                priority=body.priority,
                due_date=body.due_date,
                status=body.status,
            )
        )
    except TaskError as e:
        raise http_error(e) from e


@router.get(
    "",
    response_model=list[TaskOut],
    summary="Listar tareas",
)
def list_tasks(
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    use_case: ListTasksUseCase = Depends(list_tasks_use_case),
) -> list[Task]:
    """
    Obtiene las tareas, con filtros y orden opcionales.

    - **status** / **priority**: filtros por valor exacto.
    - **sortBy**: `dueDate` (ascendente) o `priority` (High primero).
    """
    try:
        return use_case.execute(
            ListTasksCommand(status=status_filter, priority=priority, sort_by=sort_by)
        )
    except TaskError as e:
        raise http_error(e) from e


@router.patch(
    "/{task_id}",
    response_model=TaskOut,
    summary="Cambiar estado o prioridad de una tarea",
)
def update_task(
    task_id: str,
    body: TaskUpdateIn,
    use_case: UpdateTaskUseCase = Depends(update_task_use_case),
) -> Task:
    """
    Modifica el estado y/o la prioridad de una tarea existente.
    Cualquier otro campo del cuerpo se ignora.

    - **task_id**: Identificador de la tarea.
    """
    try:
        return use_case.execute(
            task_id, UpdateTaskCommand(status=body.status, priority=body.priority)
        )
    except TaskError as e:
        raise http_error(e) from e


@router.delete(
    "/{task_id}",
    response_model=TaskDeletedOut,
    summary="Eliminar una tarea",
)
def delete_task(
    task_id: str,
    use_case: DeleteTaskUseCase = Depends(delete_task_use_case),
) -> dict:
    """
    Elimina una tarea del sistema y la devuelve como confirmación.

    - **task_id**: Identificador de la tarea a eliminar.
    """
    try:
        task = use_case.execute(DeleteTaskCommand(id=task_id))
    except TaskError as e:
        raise http_error(e) from e
    return {"message": "Task deleted successfully", "task": task}
