from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from job_roles_api.config import get_settings
from job_roles_api.db import Base, get_engine
from job_roles_api.main import app
import job_roles_api.models  # noqa: F401


@pytest.fixture(autouse=True)
def reset_api_caches() -> Iterator[None]:
    get_settings.cache_clear()
    get_engine.cache_clear()
    yield
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture
def sqlite_url(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> str:
    url = f"sqlite+pysqlite:///{tmp_path / 'api-tests.db'}"
    monkeypatch.setenv("API_DATABASE_URL", url)
    monkeypatch.setenv("API_DB_ECHO", "false")
    monkeypatch.delenv("APP_ENV", raising=False)
    return url


@pytest.fixture
def client(sqlite_url: str) -> Iterator[TestClient]:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    engine.dispose()
