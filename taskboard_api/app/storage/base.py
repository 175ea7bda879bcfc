"""
Abstract persistence capability.

``Storage`` lists the record‑level primitives the services rely on:
``get``/``insert``/``update``/``delete`` per entity plus a handful of
lookups.  It contains no business rules.  Implementations must make
every single‑record write atomic and must reject a duplicate
``(project_id, user_id)`` membership pair themselves, rather than
relying on the service‑level pre‑check.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..schemas.member import ProjectMemberRead
from ..schemas.project import ProjectRead
from ..schemas.task import TaskRead
from ..schemas.user import UserInDB


class StorageError(Exception):
    """Unexpected failure of the underlying store."""


class RecordNotFoundError(StorageError):
    """Raised by ``update_*`` when the target id does not exist."""


class DuplicateRecordError(StorageError):
    """A uniqueness constraint was violated (username, membership pair)."""


class IntegrityViolationError(StorageError):
    """A reference points at a record that does not exist."""


class Storage(ABC):
    """Record storage for users, projects, tasks and project members."""

    @abstractmethod
    def init_schema(self) -> None:
        """Create or migrate the underlying schema."""

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserInDB]: ...

    @abstractmethod
    def find_user_by_username(self, username: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def insert_user(self, username: str, password: str) -> UserInDB: ...

    @abstractmethod
    def update_user(self, user_id: int, fields: Dict[str, Any]) -> UserInDB: ...

    @abstractmethod
    def delete_user(self, user_id: int) -> None: ...

    # Projects
    @abstractmethod
    def get_project(self, project_id: int) -> Optional[ProjectRead]: ...

    @abstractmethod
    def insert_project(
        self,
        name: str,
        owner_id: int,
        description: Optional[str] = None,
        status: str = "active",
    ) -> ProjectRead: ...

    @abstractmethod
    def update_project(self, project_id: int, fields: Dict[str, Any]) -> ProjectRead: ...

    @abstractmethod
    def delete_project(self, project_id: int) -> None: ...

    @abstractmethod
    def find_projects_by_owner(self, user_id: int) -> List[ProjectRead]: ...

    @abstractmethod
    def find_projects_by_member_user_id(self, user_id: int) -> List[ProjectRead]: ...

    # Tasks
    @abstractmethod
    def get_task(self, task_id: int) -> Optional[TaskRead]: ...

    @abstractmethod
    def insert_task(
        self,
        project_id: int,
        title: str,
        description: Optional[str] = None,
        status: str = "todo",
        assignee_id: Optional[int] = None,
    ) -> TaskRead: ...

    @abstractmethod
    def update_task(self, task_id: int, fields: Dict[str, Any]) -> TaskRead: ...

    @abstractmethod
    def delete_task(self, task_id: int) -> None: ...

    @abstractmethod
    def find_tasks_by_project(self, project_id: int) -> List[TaskRead]: ...

    # Project members
    @abstractmethod
    def get_membership(self, membership_id: int) -> Optional[ProjectMemberRead]: ...

    @abstractmethod
    def insert_membership(self, project_id: int, user_id: int) -> ProjectMemberRead: ...

    @abstractmethod
    def update_membership(self, membership_id: int, fields: Dict[str, Any]) -> ProjectMemberRead: ...

    @abstractmethod
    def delete_membership(self, membership_id: int) -> None: ...

    @abstractmethod
    def find_memberships_by_project(self, project_id: int) -> List[ProjectMemberRead]: ...

    @abstractmethod
    def find_membership(self, project_id: int, user_id: int) -> Optional[ProjectMemberRead]: ...
