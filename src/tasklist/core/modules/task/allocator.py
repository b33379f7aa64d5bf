"""Compact per-user task numbering.

New tasks take the lowest positive integer the user is not using, so numbers
freed by deletion are handed out again instead of growing a counter.
"""

from collections.abc import Iterable

from tasklist.core.modules.task.repository import TaskRepository


def smallest_free_id(ids: Iterable[int]) -> int:
    """Return the smallest positive integer not in ids.

    >>> smallest_free_id([])
    1
    >>> smallest_free_id([1, 2, 3])
    4
    >>> smallest_free_id([1, 3])
    2
    """
    candidate = 1
    for task_id in sorted(set(ids)):
        if task_id < candidate:
            continue
        if task_id > candidate:
            break
        candidate += 1
    return candidate


class IdAllocator:
    """Picks the id for a user's next task.

    Allocation and insertion are separate steps, so two concurrent callers can get
    the same id. The repository's unique (username, id) index rejects the second
    insert; callers must treat DuplicateTaskIdError as a lost race and retry.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    async def allocate_id(self, username: str) -> int:
        return smallest_free_id(await self._repository.list_ids(username))
