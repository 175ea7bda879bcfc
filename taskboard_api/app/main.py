"""
Main entrypoint for the Taskboard API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn taskboard_api.app.main:app --reload

Tests and embedding code can call ``create_app`` with their own
``Settings`` and ``Storage`` instead of the environment defaults.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request

from .api.errors import register_exception_handlers
from .api.v1.endpoints import health
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .services.seed_service import seed_demo_data
from .storage import Storage, build_storage


logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next):
    """Middleware to log request method, path, status and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    logger.info("%s %s - %s - %.4fs", request.method, request.url.path, response.status_code, elapsed)
    return response


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment.
    storage : Optional[Storage]
        Persistence backend.  Defaults to the backend selected by
        ``settings.storage_backend``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The schema is
        migrated (and demo data seeded, if enabled) on startup.
    """
    config = settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(config.log_level, config.log_file or None)

    app = FastAPI(title=config.project_name, version=config.api_version)
    app.state.settings = config
    app.state.storage = storage if storage is not None else build_storage(config)

    register_exception_handlers(app)
    app.middleware("http")(log_requests)

    app.include_router(v1_router, prefix=config.api_prefix)
    app.include_router(health.router, tags=["health"])

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies pending migrations.
        app.state.storage.init_schema()
        if config.seed_demo_data:
            await seed_demo_data(app.state.storage)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
