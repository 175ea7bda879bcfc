"""
Business logic for kanban tasks.

Any member of a project (owner included) may create, update and
delete its tasks.  For update and delete the membership check uses
the task's own ``project_id`` as stored, never a project supplied by
the caller.  Task status has no workflow: ``todo``, ``in_progress``
and ``done`` may follow one another in any order.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.exceptions import Forbidden, NotFound, ValidationError
from ..schemas.task import TASK_STATUSES, TaskRead
from ..storage.base import RecordNotFoundError, Storage
from .access_policy import is_member


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status", "assignee_id")


class TaskService:
    """Create, list, update and delete tasks of a project."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def _require_member(self, requester_id: int, project_id: int) -> None:
        if not is_member(self.storage, requester_id, project_id):
            logger.warning("User %s denied task access on project %s", requester_id, project_id)
            raise Forbidden("Access denied")

    def _validate_title(self, title: Optional[str]) -> None:
        if title is None or not title.strip():
            raise ValidationError("Task title is required", field="title")

    def _validate_status(self, status: Optional[str]) -> None:
        if status not in TASK_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(TASK_STATUSES)}", field="status")

    def _validate_assignee(self, assignee_id: Optional[int]) -> None:
        if assignee_id is not None and self.storage.get_user(assignee_id) is None:
            raise ValidationError("Assignee does not exist", field="assigneeId")

    async def list_tasks(self, requester_id: int, project_id: int) -> List[TaskRead]:
        self._require_member(requester_id, project_id)
        return self.storage.find_tasks_by_project(project_id)

    async def create_task(
        self,
        requester_id: int,
        project_id: int,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
        assignee_id: Optional[int] = None,
    ) -> TaskRead:
        """Create a task in ``project_id``.  Status defaults to ``todo``."""
        self._require_member(requester_id, project_id)
        self._validate_title(title)
        status = status or "todo"
        self._validate_status(status)
        self._validate_assignee(assignee_id)
        task = self.storage.insert_task(
            project_id=project_id,
            title=title,
            description=description,
            status=status,
            assignee_id=assignee_id,
        )
        logger.info("User %s created task %s in project %s", requester_id, task.id, project_id)
        return task

    async def update_task(self, requester_id: int, task_id: int, fields: Dict[str, Any]) -> TaskRead:
        """Apply a partial update to a task.

        ``fields`` may hold any subset of ``title``, ``description``,
        ``status`` and ``assignee_id``.  A task never moves to another
        project.
        """
        task = self.storage.get_task(task_id)
        if task is None:
            raise NotFound("Task not found")
        self._require_member(requester_id, task.project_id)

        for key in fields:
            if key not in UPDATABLE_FIELDS:
                raise ValidationError(f"Field '{key}' cannot be updated", field=key)
        if "title" in fields:
            self._validate_title(fields["title"])
        if "status" in fields:
            self._validate_status(fields["status"])
        if "assignee_id" in fields:
            self._validate_assignee(fields["assignee_id"])

        try:
            updated = self.storage.update_task(task_id, dict(fields))
        except RecordNotFoundError as exc:
            raise NotFound("Task not found") from exc
        logger.info("User %s updated task %s: %s", requester_id, task_id, sorted(fields))
        return updated

    async def delete_task(self, requester_id: int, task_id: int) -> None:
        """Delete a task.

        The existence check runs before the delete, so removing the
        same id twice reports ``NotFound`` the second time.
        """
        task = self.storage.get_task(task_id)
        if task is None:
            raise NotFound("Task not found")
        self._require_member(requester_id, task.project_id)
        self.storage.delete_task(task_id)
        logger.info("User %s deleted task %s from project %s", requester_id, task_id, task.project_id)
