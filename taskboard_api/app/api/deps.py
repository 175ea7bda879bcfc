"""
FastAPI dependencies wiring services to the application's storage.

The storage instance is created by ``create_app`` and stored on
``app.state``; handlers never touch a module‑level connection.
"""

from fastapi import Depends, Request

from ..core.config import Settings
from ..services import MemberService, ProjectService, TaskService, UserService
from ..storage.base import Storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_user_service(storage: Storage = Depends(get_storage)) -> UserService:
    return UserService(storage)


def get_project_service(storage: Storage = Depends(get_storage)) -> ProjectService:
    return ProjectService(storage)


def get_member_service(storage: Storage = Depends(get_storage)) -> MemberService:
    return MemberService(storage)


def get_task_service(storage: Storage = Depends(get_storage)) -> TaskService:
    return TaskService(storage)
