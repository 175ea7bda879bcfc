from typing import Generator

import pytest
from fastapi.testclient import TestClient

from taskboard_api.app.core.config import Settings
from taskboard_api.app.main import create_app
from taskboard_api.app.storage import SQLiteStorage


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database file."""
    return Settings(
        database_url=str(tmp_path / "taskboard_test.db"),
        secret_key="test-secret",
        seed_demo_data=False,
    )


@pytest.fixture
def storage(settings) -> SQLiteStorage:
    store = SQLiteStorage(settings.database_url)
    store.init_schema()
    return store


@pytest.fixture
def client(settings, storage) -> Generator[TestClient, None, None]:
    """In-process TestClient; entering the context runs the startup hook."""
    app = create_app(settings=settings, storage=storage)
    with TestClient(app) as test_client:
        yield test_client
