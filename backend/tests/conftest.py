"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across unit and integration tests.

Environment variables are set at import time, before any scholar_graph
module is imported, because settings and the rate limiter are created when
scholar_graph.config is first imported.
"""

import os
import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load .env file from project root so NEO4J_* are available to integration tests
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

# Forcefully set test configuration (overrides .env values)
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.setdefault("NEO4J_URI", "bolt://localhost:7687")
os.environ.setdefault("NEO4J_USER", "neo4j")
os.environ.setdefault("NEO4J_PASSWORD", "testpass")


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_neo4j_client() -> MagicMock:
    """
    Mock Neo4jClient with async query helpers.

    run_query returns [] and run_single returns None unless a test
    configures them.
    """
    client = MagicMock()
    client.run_query = AsyncMock(return_value=[])
    client.run_single = AsyncMock(return_value=None)
    client.execute_write = AsyncMock()
    client.verify_connectivity = AsyncMock(return_value=True)
    return client


@pytest.fixture
def sample_analytics_config() -> dict[str, Any]:
    """Analytics parameters matching the structure of config/default.yaml."""
    return {
        "queries_limit": 5,
        "advanced_limit": 10,
        "ranking_limit": 10,
        "research_trends_limit": 5,
        "trending_since": "2024-01-01",
        "research_trends_months": 6,
    }
