"""
Pydantic models for kanban tasks.

A task belongs to exactly one project and sits in one of three board
columns.  There is no workflow: any status may follow any other.
"""

from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import Field

from .base import CamelModel


TaskStatus = Literal["todo", "in_progress", "done"]
TASK_STATUSES = get_args(TaskStatus)


class TaskCreate(CamelModel):
    """Schema for creating a task.  ``projectId`` comes from the URL."""

    title: str = Field(..., examples=["Write release notes"])
    description: Optional[str] = None
    status: TaskStatus = "todo"
    assignee_id: Optional[int] = None


class TaskUpdate(CamelModel):
    """Schema for a partial task update.

    Only fields present in the body are applied, so ``assigneeId:
    null`` explicitly unassigns the task.  ``projectId`` cannot be changed and,
    like any unknown key, is rejected.
    """

    model_config = {"extra": "forbid"}

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    assignee_id: Optional[int] = None


class TaskRead(CamelModel):
    """Schema for a task returned by the API."""

    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus = "todo"
    project_id: int
    assignee_id: Optional[int] = None
    created_at: Optional[datetime] = None
