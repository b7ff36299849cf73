"""
Scholar Graph Test Suite

Test Structure:
    tests/
    ├── conftest.py          # Shared fixtures and configuration
    ├── neo4j_mocks.py       # Driver result/transaction stand-ins
    ├── unit/                # Unit tests (mocked Neo4j, no external dependencies)
    └── integration/         # Integration tests (require a running Neo4j)

Running Tests:
    # Run unit tests (integration tests are deselected by default)
    pytest -v

    # Run integration tests against NEO4J_URI / NEO4J_USER / NEO4J_PASSWORD
    pytest -m integration -v
"""
