"""
Pydantic models for project data.

A project is owned by exactly one user and carries a lifecycle
status, ``active`` or ``archived``.  Either status may follow the
other.
"""

from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import Field

from .base import CamelModel


ProjectStatus = Literal["active", "archived"]
PROJECT_STATUSES = get_args(ProjectStatus)


class ProjectCreate(CamelModel):
    """Schema for creating a project.  The caller becomes the owner."""

    name: str = Field(..., examples=["Website relaunch"])
    description: Optional[str] = Field(None, examples=["Q3 marketing site"])


class ProjectUpdate(CamelModel):
    """Schema for updating a project.

    All fields are optional; only the fields present in the request
    body are changed.  ``ownerId`` and other unknown keys are rejected.
    """

    model_config = {"extra": "forbid"}

    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None


class ProjectRead(CamelModel):
    """Schema for reading a project from the API."""

    id: int
    name: str
    description: Optional[str] = None
    owner_id: int
    status: ProjectStatus = "active"
    created_at: Optional[datetime] = None
