"""
Pydantic models for user data.

``UserRead`` is the only user shape returned by the API; it never
contains the credential.  ``UserInDB`` is the stored record, used
between the storage backend and the services.
"""

from pydantic import Field

from .base import CamelModel


class UserCredentials(CamelModel):
    """Body of ``/auth/register`` and ``/auth/login``."""

    username: str = Field(..., examples=["alice"])
    password: str = Field(..., examples=["secret1"])


class UserRead(CamelModel):
    """Public view of a user: identifier and username only."""

    id: int
    username: str


class UserInDB(UserRead):
    """Stored user record.  ``password`` holds the ``salt$hash`` string."""

    password: str
