"""
Business logic for project membership.

Only a project's owner may grant access.  The owner already counts as
a member and is never written to the membership table.
"""

import logging
from typing import List

from ..core.exceptions import Conflict, Forbidden, NotFound
from ..schemas.user import UserRead
from ..storage.base import DuplicateRecordError, Storage
from .access_policy import is_member, is_owner


logger = logging.getLogger(__name__)


class MemberService:
    """Grant and list project memberships."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def add_member(self, requester_id: int, project_id: int, username: str) -> UserRead:
        """Grant ``username`` access to the project and return that user.

        Raises ``NotFound`` for an unknown project or username,
        ``Forbidden`` unless the requester owns the project and
        ``Conflict`` if the user is already a member.  The
        already‑a‑member check is not atomic with the insert; the
        store's UNIQUE(project_id, user_id) constraint closes that gap
        and its violation is reported as ``Conflict`` too.
        """
        if self.storage.get_project(project_id) is None:
            raise NotFound("Project not found")
        if not is_owner(self.storage, requester_id, project_id):
            logger.warning("User %s denied adding members to project %s", requester_id, project_id)
            raise Forbidden("Only owners can add members")

        user = self.storage.find_user_by_username(username)
        if user is None:
            raise NotFound("User not found")
        if is_member(self.storage, user.id, project_id):
            raise Conflict("User is already a member", field="username")
        try:
            self.storage.insert_membership(project_id=project_id, user_id=user.id)
        except DuplicateRecordError as exc:
            raise Conflict("User is already a member", field="username") from exc
        logger.info("User %s added %s to project %s", requester_id, user.username, project_id)
        return UserRead(id=user.id, username=user.username)

    async def list_members(self, requester_id: int, project_id: int) -> List[UserRead]:
        """Return the users holding a membership row for the project."""
        if not is_member(self.storage, requester_id, project_id):
            logger.warning("User %s denied member list of project %s", requester_id, project_id)
            raise Forbidden("Access denied")
        members: List[UserRead] = []
        for membership in self.storage.find_memberships_by_project(project_id):
            user = self.storage.get_user(membership.user_id)
            if user is not None:
                members.append(UserRead(id=user.id, username=user.username))
        return members
