import structlog

from tasklist.core.core import Service
from tasklist.core.modules.task.allocator import IdAllocator
from tasklist.core.modules.task.models import Task
from tasklist.core.modules.task.repository import DuplicateTaskIdError, TaskRepository
from tasklist.errors import AllocationConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


def validate_description(description: str) -> str:
    if not description.strip():
        raise ValidationError("Task description cannot be empty")
    return description


def validate_task_id(task_id: int) -> None:
    if task_id <= 0:
        raise ValidationError("Task id must be a positive integer")


class TaskService(Service):
    """Manages per-user tasks with compact ids."""

    def __init__(self, repository: TaskRepository, allocator: IdAllocator, allocation_retries: int = 1) -> None:
        self._repository = repository
        self._allocator = allocator
        self._allocation_retries = max(allocation_retries, 0)

    async def list_tasks(self, username: str) -> list[Task]:
        return await self._repository.list_tasks(username)

    async def get_task(self, username: str, task_id: int) -> Task:
        validate_task_id(task_id)
        task = await self._repository.get(username, task_id)
        if task is None:
            raise NotFoundError(f"Task not found: {task_id}")
        return task

    async def create_task(self, username: str, description: str) -> Task:
        """Insert a task under the smallest free id.

        A concurrent create for the same user may take the id between allocation and
        insert; the attempt is then repeated with a fresh allocation.
        """
        description = validate_description(description)

        for attempt in range(self._allocation_retries + 1):
            task_id = await self._allocator.allocate_id(username)
            task = Task(id=task_id, username=username, description=description)
            try:
                await self._repository.insert(task)
            except DuplicateTaskIdError:
                logger.warning("task_id_conflict", username=username, task_id=task_id, attempt=attempt + 1)
                continue
            logger.debug("task_created", username=username, task_id=task_id)
            return task

        raise AllocationConflictError

    async def update_task(self, username: str, task_id: int, description: str) -> Task:
        validate_task_id(task_id)
        description = validate_description(description)
        if await self._repository.update(username, task_id, description) == 0:
            raise NotFoundError(f"Task not found: {task_id}")
        return Task(id=task_id, username=username, description=description)

    async def delete_task(self, username: str, task_id: int) -> None:
        validate_task_id(task_id)
        if await self._repository.delete(username, task_id) == 0:
            raise NotFoundError(f"Task not found: {task_id}")
        logger.debug("task_deleted", username=username, task_id=task_id)
