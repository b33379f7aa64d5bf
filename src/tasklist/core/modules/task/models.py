from pydantic import BaseModel, Field

from tasklist.core.db import MongoModel


class Task(MongoModel):
    """Task owned by a single user.

    Indexed on (username, id) - unique. Ids are only unique per user.
    """

    id: int = Field(..., gt=0)
    username: str
    description: str = Field(..., min_length=1)


class TaskView(BaseModel):
    """Task (API representation)."""

    id: int = Field(..., description="Task number, unique among the owner's tasks")
    description: str = Field(..., description="Task text")

    @classmethod
    def from_domain(cls, task: Task) -> "TaskView":
        """Create view model from domain model."""
        return cls(id=task.id, description=task.description)
