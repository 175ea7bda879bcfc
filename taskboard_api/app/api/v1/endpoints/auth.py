"""
Authentication endpoints for API v1.

Registration and login are public.  Login returns a bearer token
valid for ``access_token_expire_minutes`` (24 hours by default) which
clients send as ``Authorization: Bearer <token>`` on every other call.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from taskboard_api.app.api.deps import get_settings, get_user_service
from taskboard_api.app.core.config import Settings
from taskboard_api.app.core.exceptions import NotFound, Unauthorized
from taskboard_api.app.core.security import create_access_token, get_current_user
from taskboard_api.app.schemas.auth import Token
from taskboard_api.app.schemas.user import UserCredentials, UserRead
from taskboard_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    credentials: UserCredentials,
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """Register a new user.

    Returns the new user's id and username.  The password is stored
    as a salted hash and never echoed back.  A taken username yields
    400.
    """
    return await users.register_user(credentials.username, credentials.password)


@router.post("/login", response_model=Token)
async def login_user(
    credentials: UserCredentials,
    users: UserService = Depends(get_user_service),
    config: Settings = Depends(get_settings),
) -> Token:
    """Check the credentials and return a signed bearer token."""
    user = await users.authenticate(credentials.username, credentials.password)
    token = create_access_token({"sub": str(user.id), "username": user.username}, config=config)
    return Token(token=token)


@router.get("/me", response_model=UserRead)
async def read_current_user(
    current_user: Dict[str, Any] = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """Return the caller's id and username.

    A token whose user no longer exists is rejected with 401.
    """
    try:
        return await users.get_user(current_user["user_id"])
    except NotFound as exc:
        raise Unauthorized("User not found") from exc
