"""
Service layer.

Each service encapsulates the business rules for one entity and is
constructed with a ``Storage`` instance, so the rules can be
exercised without a running server.  Authorization decisions go
through ``access_policy`` and are re‑evaluated on every call.
"""

from .member_service import MemberService
from .project_service import ProjectService
from .task_service import TaskService
from .user_service import UserService

__all__ = ["MemberService", "ProjectService", "TaskService", "UserService"]
