"""
Security helpers for password hashing and bearer token authentication.

Passwords are hashed with PBKDF2‑HMAC (SHA‑256) and a random
per‑password salt; only the ``salt$hash`` string is ever stored.
Access tokens are standard HS256 JSON Web Tokens produced and
verified by PyJWT.  Each token carries the user id (``sub``), the
username and an expiration timestamp (``exp``).
"""

import hashlib
import hmac
import os
import time
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, settings as default_settings


PBKDF2_ITERATIONS = 100_000


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[int] = None,
    config: Optional[Settings] = None,
) -> str:
    """Create a signed JWT with the given claims.

    The payload is extended with ``iat`` and ``exp`` (UNIX
    timestamps).  Clients must send the token in the
    ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed, e.g. ``{"sub": "1", "username": "alice"}``.
        ``sub`` must be a string.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``access_token_expire_minutes * 60``.
    config : Optional[Settings]
        Settings providing the secret and algorithm.  Defaults to the
        module‑level settings.
    """
    config = config or default_settings
    to_encode = data.copy()
    now = int(time.time())
    exp_seconds = expires_delta if expires_delta is not None else config.access_token_expire_minutes * 60
    to_encode["iat"] = now
    to_encode["exp"] = now + exp_seconds
    return jwt.encode(to_encode, config.secret_key, algorithm=config.algorithm)


def decode_access_token(token: str, config: Optional[Settings] = None) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT.

    Returns the payload if the signature and expiry are valid,
    otherwise ``None``.
    """
    config = config or default_settings
    try:
        return jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except jwt.InvalidTokenError:
        return None


security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that resolves the authenticated caller.

    A request without a bearer token is rejected with 401; a token
    that fails verification (bad signature, expired, malformed) is
    rejected with 403.  On success returns ``{"user_id", "username"}``
    taken from the token claims.  The user record itself is not
    loaded here; membership checks happen in the services.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(credentials.credentials, request.app.state.settings)
    if not payload:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
    return {"user_id": user_id, "username": payload.get("username")}


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by ``$``
    (salt in hex, then hash in hex).
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored ``salt$hash`` string.

    Uses a constant‑time comparison.  A malformed stored value never
    matches.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
