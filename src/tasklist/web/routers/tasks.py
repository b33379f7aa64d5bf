"""Task endpoints. Every route goes through the session gate."""

from typing import Annotated, Any

from fastapi import APIRouter, Path
from pydantic import BaseModel, Field

from tasklist.core.modules.task.models import TaskView
from tasklist.web.deps import AppDep, AuthTokenDep
from tasklist.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["tasks"])

TaskId = Annotated[int, Path(ge=1, description="Task number")]

AUTH_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Not authenticated or session expired"},
    503: {"model": ErrorResponse, "description": "Storage unavailable"},
}


class TaskRequest(BaseModel):
    """Task text for create and update."""

    description: str = Field(..., min_length=1, description="Task text")

    model_config = {"json_schema_extra": {"examples": [{"description": "Buy milk"}]}}


@router.get(
    "/tasks",
    summary="List tasks",
    description="Get all tasks of the current user, ordered by id.",
    operation_id="listTasks",
    responses={200: {"description": "List of tasks"}, **AUTH_RESPONSES},
)
async def list_tasks(app: AppDep, auth_token: AuthTokenDep) -> list[TaskView]:
    return await app.list_tasks(auth_token)


@router.post(
    "/tasks",
    summary="Create task",
    description="Create a task. It gets the lowest id the user is not currently using.",
    operation_id="createTask",
    status_code=201,
    responses={
        201: {"description": "Task created"},
        400: {"model": ErrorResponse, "description": "Empty description"},
        409: {"model": ErrorResponse, "description": "Concurrent create took the id, retry"},
        **AUTH_RESPONSES,
    },
)
async def create_task(request: TaskRequest, app: AppDep, auth_token: AuthTokenDep) -> TaskView:
    return await app.create_task(auth_token, request.description)


@router.get(
    "/tasks/{task_id}",
    summary="Get task",
    operation_id="getTask",
    responses={
        200: {"description": "Task"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        **AUTH_RESPONSES,
    },
)
async def get_task(task_id: TaskId, app: AppDep, auth_token: AuthTokenDep) -> TaskView:
    return await app.get_task(auth_token, task_id)


@router.put(
    "/tasks/{task_id}",
    summary="Update task",
    description="Replace the description of a task.",
    operation_id="updateTask",
    responses={
        200: {"description": "Task updated"},
        400: {"model": ErrorResponse, "description": "Empty description"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        **AUTH_RESPONSES,
    },
)
async def update_task(task_id: TaskId, request: TaskRequest, app: AppDep, auth_token: AuthTokenDep) -> TaskView:
    return await app.update_task(auth_token, task_id, request.description)


@router.delete(
    "/tasks/{task_id}",
    summary="Delete task",
    description="Delete a task. Its id becomes free for the next created task.",
    operation_id="deleteTask",
    status_code=204,
    responses={
        204: {"description": "Task deleted"},
        404: {"model": ErrorResponse, "description": "Task not found"},
        **AUTH_RESPONSES,
    },
)
async def delete_task(task_id: TaskId, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_task(auth_token, task_id)
