"""
Project endpoints for API v1.

Any authenticated user can create projects and list the projects they
own or belong to.  Reading a project and its member list requires
membership; changing settings and adding members is reserved to the
owner.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from taskboard_api.app.api.deps import get_member_service, get_project_service
from taskboard_api.app.core.security import get_current_user
from taskboard_api.app.schemas.member import MemberAdd
from taskboard_api.app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from taskboard_api.app.schemas.user import UserRead
from taskboard_api.app.services.member_service import MemberService
from taskboard_api.app.services.project_service import ProjectService


router = APIRouter()


@router.get("", response_model=List[ProjectRead])
async def list_projects(
    current_user: Dict[str, Any] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
) -> List[ProjectRead]:
    """List projects the caller owns or is a member of.  No ordering is guaranteed."""
    return await projects.list_projects_for_user(current_user["user_id"])


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    """Create a project owned by the caller, with status ``active``."""
    return await projects.create_project(
        owner_id=current_user["user_id"],
        name=project.name,
        description=project.description,
    )


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await projects.get_project(current_user["user_id"], project_id)


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: int,
    updates: ProjectUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    """Update name, description or status.  Owner only.

    Only fields present in the body are changed; unspecified fields
    keep their values.
    """
    return await projects.update_project(
        current_user["user_id"],
        project_id,
        updates.model_dump(exclude_unset=True),
    )


@router.get("/{project_id}/members", response_model=List[UserRead])
async def list_members(
    project_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
    members: MemberService = Depends(get_member_service),
) -> List[UserRead]:
    return await members.list_members(current_user["user_id"], project_id)


@router.post("/{project_id}/members", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def add_member(
    project_id: int,
    body: MemberAdd,
    current_user: Dict[str, Any] = Depends(get_current_user),
    members: MemberService = Depends(get_member_service),
) -> UserRead:
    """Grant a user access to the project by username.  Owner only."""
    return await members.add_member(current_user["user_id"], project_id, body.username)
