"""
Business logic for projects.

Any authenticated user may create a project and becomes its owner.
Only the owner may change the project's name, description or status;
members may read it.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.exceptions import Forbidden, NotFound, ValidationError
from ..schemas.project import PROJECT_STATUSES, ProjectRead
from ..storage.base import RecordNotFoundError, Storage
from .access_policy import is_member, is_owner


logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "status")


def _require_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Project name is required", field="name")
    return name


class ProjectService:
    """Create, read, update and list projects."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def create_project(
        self,
        owner_id: int,
        name: str,
        description: Optional[str] = None,
    ) -> ProjectRead:
        """Create an ``active`` project owned by ``owner_id``."""
        _require_name(name)
        project = self.storage.insert_project(name=name, owner_id=owner_id, description=description)
        logger.info("User %s created project %s '%s'", owner_id, project.id, project.name)
        return project

    async def get_project(self, requester_id: int, project_id: int) -> ProjectRead:
        """Return the project if the requester is a member (or the owner)."""
        project = self.storage.get_project(project_id)
        if project is None:
            raise NotFound("Project not found")
        if not is_member(self.storage, requester_id, project_id):
            logger.warning("User %s denied read access to project %s", requester_id, project_id)
            raise Forbidden("Access denied")
        return project

    async def update_project(
        self,
        requester_id: int,
        project_id: int,
        fields: Dict[str, Any],
    ) -> ProjectRead:
        """Apply a partial update; owner only.

        ``fields`` may contain any subset of ``name``, ``description``
        and ``status``.  An empty mapping returns the project unchanged.
        """
        if self.storage.get_project(project_id) is None:
            raise NotFound("Project not found")
        if not is_owner(self.storage, requester_id, project_id):
            logger.warning("User %s denied update of project %s", requester_id, project_id)
            raise Forbidden("Only owners can update project settings")

        for key in fields:
            if key not in UPDATABLE_FIELDS:
                raise ValidationError(f"Field '{key}' cannot be updated", field=key)
        if "name" in fields:
            _require_name(fields["name"])
        if "status" in fields and fields["status"] not in PROJECT_STATUSES:
            raise ValidationError(
                f"Status must be one of: {', '.join(PROJECT_STATUSES)}", field="status"
            )

        try:
            project = self.storage.update_project(project_id, dict(fields))
        except RecordNotFoundError as exc:
            raise NotFound("Project not found") from exc
        logger.info("User %s updated project %s: %s", requester_id, project_id, sorted(fields))
        return project

    async def list_projects_for_user(self, user_id: int) -> List[ProjectRead]:
        """Return owned and member projects, each at most once, in no particular order."""
        projects: Dict[int, ProjectRead] = {}
        for project in self.storage.find_projects_by_owner(user_id):
            projects[project.id] = project
        for project in self.storage.find_projects_by_member_user_id(user_id):
            projects.setdefault(project.id, project)
        return list(projects.values())
