import os

os.environ.setdefault("ADMIN_PASSWORD", "test-admin-password")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from app.main import app
from app.core.config import settings
from app.tests.fixtures.backend import *
from app.tests.fixtures.business_hours import mock_current_time


@pytest.fixture(scope="function")
def client():
    """Fixture providing a TestClient without the admin cookie."""
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture(scope="function", loop_scope="function")
async def admin_client():
    """Fixture providing a TestClient logged in through the admin login endpoint."""
    with TestClient(app) as c:
        response = c.post("/api/auth/admin", json={"password": settings.ADMIN_PASSWORD})
        assert response.status_code == 200
        yield c
