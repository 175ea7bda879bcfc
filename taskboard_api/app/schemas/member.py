"""Schemas for project membership."""

from pydantic import Field

from .base import CamelModel


class MemberAdd(CamelModel):
    """Body of ``POST /projects/{id}/members``."""

    username: str = Field(..., examples=["bob"])


class ProjectMemberRead(CamelModel):
    """Stored membership row granting ``user_id`` access to ``project_id``."""

    id: int
    project_id: int
    user_id: int
