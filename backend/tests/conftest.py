"""
Shared pytest fixtures: an in-memory SQLite database and a TestClient.
"""
import os
import tempfile

# Must be set before database/main are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="livestock-logs-"))

import pytest
from fastapi.testclient import TestClient

from database import Base, engine
from main import app


@pytest.fixture(autouse=True)
def reset_database():
    """Recreate every table so tests never see each other's rows."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def tenant_headers():
    return {"X-Tenant-ID": "farm-a", "X-User-ID": "manager@farm-a"}


@pytest.fixture
def batch(client, tenant_headers):
    response = client.post("/batches/", json={
        "batch_no": "B-0001",
        "species": "broiler",
        "initial_quantity": 100,
        "cost_per_unit": 2.5,
        "acquisition_date": "2026-01-01",
        "target_harvest_date": "2026-02-15",
    }, headers=tenant_headers)
    assert response.status_code == 200, response.text
    return response.json()
