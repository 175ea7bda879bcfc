"""Schemas for the authentication endpoints."""

from pydantic import BaseModel


class Token(BaseModel):
    """Bearer token returned by ``/auth/login``."""

    token: str
