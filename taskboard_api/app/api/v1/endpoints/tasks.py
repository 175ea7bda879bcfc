"""
Task endpoints for API v1.

Tasks are listed and created under their project
(``/projects/{project_id}/tasks``) and updated or deleted by their own
id (``/tasks/{task_id}``).  Every operation requires membership of the
task's project.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response, status

from taskboard_api.app.api.deps import get_task_service
from taskboard_api.app.core.security import get_current_user
from taskboard_api.app.schemas.task import TaskCreate, TaskRead, TaskUpdate
from taskboard_api.app.services.task_service import TaskService


router = APIRouter()


@router.get("/projects/{project_id}/tasks", response_model=List[TaskRead])
async def list_tasks(
    project_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
) -> List[TaskRead]:
    return await tasks.list_tasks(current_user["user_id"], project_id)


@router.post(
    "/projects/{project_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    project_id: int,
    task: TaskCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
) -> TaskRead:
    """Create a task on the project's board.  Status defaults to ``todo``."""
    return await tasks.create_task(
        requester_id=current_user["user_id"],
        project_id=project_id,
        title=task.title,
        description=task.description,
        status=task.status,
        assignee_id=task.assignee_id,
    )


@router.patch("/tasks/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int,
    updates: TaskUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
) -> TaskRead:
    """Apply a partial update, e.g. move the task to another column.

    Send ``"assigneeId": null`` to unassign the task.
    """
    return await tasks.update_task(
        current_user["user_id"],
        task_id,
        updates.model_dump(exclude_unset=True),
    )


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
) -> Response:
    await tasks.delete_task(current_user["user_id"], task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
