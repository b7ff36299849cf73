"""
Integration Test Fixtures

Provides fixtures for integration tests that require a running Neo4j
instance, reached through NEO4J_URI / NEO4J_USER / NEO4J_PASSWORD.

Every test works on labels with a random suffix and tags each node it
creates with a run id, so tests never touch existing data and can clean up
after themselves through the API.

Note: scholar_graph.main is imported inside fixtures so the environment set
up by the parent conftest.py is in place first.
"""

from typing import Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="module")
def api_client() -> Generator[TestClient, None, None]:
    """
    TestClient running the real application lifespan against Neo4j.

    Skips the module when the database does not answer the readiness probe.
    """
    from scholar_graph.main import app

    with TestClient(app) as client:
        if client.get("/api/health/ready").status_code != 200:
            pytest.skip("Neo4j is not reachable")
        yield client


@pytest.fixture
def run_id() -> str:
    return uuid4().hex[:12]


@pytest.fixture
def user_label(api_client: TestClient, run_id: str) -> Generator[str, None, None]:
    """A fresh label with no nodes; its nodes are deleted afterwards."""
    label = f"Usuario_{run_id}"
    yield label
    api_client.request("DELETE", f"/nodes/{label}", json={"filter": {"test_run": run_id}})
