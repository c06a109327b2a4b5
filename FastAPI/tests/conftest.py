import os
from dataclasses import dataclass

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from app.core.rate_limiter import rate_limiter
from app.database import get_db
from app.dependencies import get_current_active_user, get_current_user
from app.main import app
from app.services.job_search_service import search_cache


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "user@example.com"
    is_active: bool = True


@pytest.fixture(autouse=True)
def _reset_process_state():
    rate_limiter.reset()
    search_cache.clear()
    yield
    rate_limiter.reset()
    search_cache.clear()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def client(stub_user: StubUser):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    app.dependency_overrides[get_current_active_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()
