"""Entry point for serving the Taskboard API.

Launches the FastAPI application with uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as SECRET_KEY, DATABASE_URL, HOST and PORT is read
from environment variables (see ``taskboard_api/app/core/config.py``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from taskboard_api.app.core.config import settings
from taskboard_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
