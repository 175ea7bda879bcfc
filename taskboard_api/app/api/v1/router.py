"""
Top‑level router for version 1 of the API.

This router aggregates the auth, project and task routers under a
unified prefix.  The health router is mounted separately by
``create_app`` so that it stays outside the API prefix.
"""

from fastapi import APIRouter

from .endpoints import auth, projects, tasks


router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
# The tasks router defines both ``/projects/{project_id}/tasks`` and
# ``/tasks/{task_id}`` itself, so it is included without a prefix.
router.include_router(tasks.router, tags=["tasks"])
