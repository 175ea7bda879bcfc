"""
Business logic for users.

Registration stores a salted one‑way hash of the password, never the
plaintext, and never hands the credential back to the caller.
"""

import logging

from ..core.exceptions import Conflict, NotFound, Unauthorized, ValidationError
from ..core.security import hash_password, verify_password
from ..schemas.user import UserRead
from ..storage.base import DuplicateRecordError, Storage


logger = logging.getLogger(__name__)


class UserService:
    """Registration, authentication and lookup of users."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def register_user(self, username: str, raw_password: str) -> UserRead:
        """Create a new user and return its public view.

        Raises ``ValidationError`` for a blank username or password and
        ``Conflict`` if the username is already taken.  The store's
        UNIQUE constraint backs the pre‑check, so a concurrent duplicate
        registration is also reported as ``Conflict``.
        """
        if not username or not username.strip():
            raise ValidationError("Username is required", field="username")
        if not raw_password:
            raise ValidationError("Password is required", field="password")
        if self.storage.find_user_by_username(username) is not None:
            raise Conflict("Username already exists", field="username")
        try:
            user = self.storage.insert_user(username=username, password=hash_password(raw_password))
        except DuplicateRecordError as exc:
            raise Conflict("Username already exists", field="username") from exc
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return UserRead(id=user.id, username=user.username)

    async def authenticate(self, username: str, raw_password: str) -> UserRead:
        """Return the user if the credentials match, else raise ``Unauthorized``.

        An unknown username and a wrong password are indistinguishable
        to the caller.
        """
        user = self.storage.find_user_by_username(username)
        if user is None or not verify_password(raw_password, user.password):
            logger.warning("Failed login attempt for %s", username)
            raise Unauthorized("Invalid credentials")
        return UserRead(id=user.id, username=user.username)

    async def get_user(self, user_id: int) -> UserRead:
        user = self.storage.get_user(user_id)
        if user is None:
            raise NotFound("User not found")
        return UserRead(id=user.id, username=user.username)
