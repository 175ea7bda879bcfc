"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables, in particular ``SECRET_KEY``.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Taskboard API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # All API routes are mounted under this prefix, e.g. ``/api/projects``.
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Bearer token signing.  Tokens are valid for 24 hours by default.
    secret_key: str = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET", "change_me"))
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Persistence backend.  Only ``sqlite`` is shipped; see
    # ``taskboard_api.app.storage.build_storage``.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite")

    # Path to the SQLite database file.  A relative path is resolved
    # relative to the package root by ``core.db.resolve_database_path``.
    database_url: str = os.getenv("DATABASE_URL", "taskboard.db")

    # Create the ``demo`` user with a sample project on startup.
    seed_demo_data: bool = _env_flag("SEED_DEMO_DATA")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
