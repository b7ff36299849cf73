"""
Unit Tests for the HTTP Routes

Exercises the FastAPI app end to end with the Neo4j client replaced by a
mock through dependency overrides, checking status codes, response shapes
and the error format.
"""

from typing import Any, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from neo4j.exceptions import ServiceUnavailable

from scholar_graph.dependencies import get_neo4j_client
from scholar_graph.main import app
from tests.neo4j_mocks import FakeTransaction, bind_transaction


@pytest.fixture
def client(mock_neo4j_client: MagicMock) -> Generator[TestClient, None, None]:
    """TestClient whose routes receive the mocked Neo4j client."""
    app.dependency_overrides[get_neo4j_client] = lambda: mock_neo4j_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def assert_error(response: Any, status_code: int, error_code: str) -> dict[str, Any]:
    assert response.status_code == status_code
    body = response.json()
    assert body["error"] == error_code
    assert {"message", "error_id", "timestamp"} <= body.keys()
    return body


# =============================================================================
# Nodes
# =============================================================================


class TestNodeRoutes:
    def test_create_node(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        bind_transaction(
            mock_neo4j_client,
            FakeTransaction([{"max_id": 0}, {"n": {"nombre": "Ana", "id": 1}}]),
        )

        response = client.post("/nodes/Usuario", json={"nombre": "Ana"})

        assert response.status_code == 201
        assert response.json()["node"] == {"nombre": "Ana", "id": 1}

    def test_create_node_empty_body(self, client: TestClient) -> None:
        assert_error(client.post("/nodes/Usuario", json={}), 400, "bad_request")

    def test_create_node_invalid_label(self, client: TestClient) -> None:
        assert_error(client.post("/nodes/%21%21", json={"a": 1}), 400, "bad_request")

    def test_create_multi_label_node(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        tx = FakeTransaction([{"max_id": 4}, {"n": {"id": 5}}])
        bind_transaction(mock_neo4j_client, tx)

        response = client.post("/nodes/create/Usuario,Investigador", json={"nombre": "Eva"})

        assert response.status_code == 201
        assert ":Usuario:Investigador" in tx.calls[1][0]

    def test_read_nodes_with_filters(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_query.return_value = [{"n": {"id": 1, "activo": True}}]

        response = client.get("/nodes/read/Usuario", params={"activo": "true"})

        assert response.status_code == 200
        assert response.json() == {"nodes": [{"id": 1, "activo": True}]}
        assert mock_neo4j_client.run_query.call_args.args[1] == {"activo": True}

    def test_read_node_by_id(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        mock_neo4j_client.run_single.return_value = {"n": {"id": 1, "nombre": "Ana"}}

        response = client.get("/nodes/read/Usuario/1")

        assert response.status_code == 200
        assert response.json() == {"node": {"id": 1, "nombre": "Ana"}}

    def test_read_unknown_node(self, client: TestClient) -> None:
        assert_error(client.get("/nodes/read/Usuario/12345"), 404, "not_found")

    def test_aggregate_grouped(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        mock_neo4j_client.run_query.return_value = [
            {"group": "estudiante", "count": 2},
            {"group": "docente", "count": 1},
        ]

        response = client.get("/nodes/aggregate/Usuario", params={"groupBy": "rol"})

        assert response.status_code == 200
        assert response.json()["data"][0] == {"group": "estudiante", "count": 2}
        assert "n.rol AS group" in mock_neo4j_client.run_query.call_args.args[0]

    @pytest.mark.parametrize("method", ["patch", "put"])
    def test_update_one(
        self, client: TestClient, mock_neo4j_client: MagicMock, method: str
    ) -> None:
        mock_neo4j_client.run_single.return_value = {"n": {"id": 1, "activo": True}}

        response = getattr(client, method)("/nodes/update/Usuario/1", json={"activo": True})

        assert response.status_code == 200
        assert response.json()["node"] == {"id": 1, "activo": True}

    @pytest.mark.parametrize("method", ["patch", "put"])
    def test_bulk_update(
        self, client: TestClient, mock_neo4j_client: MagicMock, method: str
    ) -> None:
        mock_neo4j_client.run_single.return_value = {"updated_count": 3}

        response = getattr(client, method)(
            "/nodes/update/Usuario",
            json={"filter": {"rol": "estudiante"}, "properties": {"activo": True}},
        )

        assert response.status_code == 200
        assert response.json()["updated_count"] == 3
        assert "3" in response.json()["message"]

    def test_bulk_update_without_filter(self, client: TestClient) -> None:
        response = client.patch("/nodes/update/Usuario", json={"properties": {"a": 1}})

        assert_error(response, 400, "bad_request")

    def test_bulk_update_unknown_field_rejected(self, client: TestClient) -> None:
        response = client.patch(
            "/nodes/update/Usuario", json={"filters": {"a": 1}, "properties": {"a": 1}}
        )

        assert response.status_code == 422

    def test_remove_properties_route_is_not_a_label(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_single.return_value = {"updated_count": 2}

        response = client.request(
            "DELETE",
            "/nodes/properties/Usuario",
            json={"filter": {"rol": "estudiante"}, "properties": ["activo"]},
        )

        assert response.status_code == 200
        assert response.json()["updated_count"] == 2

    def test_remove_properties_one(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_single.return_value = {"n": {"id": 1}}

        response = client.request(
            "DELETE", "/nodes/properties/Usuario/1", json={"properties": ["fecha"]}
        )

        assert response.status_code == 200
        assert response.json()["node"] == {"id": 1}

    def test_delete_node(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        bind_transaction(mock_neo4j_client, FakeTransaction([{"n": {"id": 1}}]))

        response = client.delete("/nodes/Usuario/1")

        assert response.status_code == 200
        assert response.json() == {"message": "Node 1 deleted successfully."}

    def test_delete_missing_node(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        bind_transaction(mock_neo4j_client, FakeTransaction([None]))

        assert_error(client.delete("/nodes/Usuario/1"), 404, "not_found")

    def test_bulk_delete(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        bind_transaction(mock_neo4j_client, FakeTransaction([{"total": 2}]))

        response = client.request(
            "DELETE", "/nodes/Usuario", json={"filter": {"rol": "estudiante"}}
        )

        assert response.status_code == 200
        assert response.json()["deleted_count"] == 2

    def test_driver_error_becomes_graph_error(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        """Errors raised while querying return 500 with the raw driver message."""
        mock_neo4j_client.run_query.side_effect = ServiceUnavailable(
            "Connection to localhost:7687 refused"
        )

        body = assert_error(client.get("/nodes/read/Usuario"), 500, "graph_error")

        assert body["message"] == "Connection to localhost:7687 refused"


# =============================================================================
# Relations
# =============================================================================


class TestRelationRoutes:
    PATH = "/relations/Usuario/1/SIGUE_A/Usuario/2"

    def test_create_relationship(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        properties = {"fecha": "2024-05-01", "estado": "Activo", "origen": "web"}
        mock_neo4j_client.run_single.return_value = {"r": properties}

        response = client.post(self.PATH, json=properties)

        assert response.status_code == 201
        assert response.json()["relation"] == properties

    def test_create_relationship_too_few_properties(self, client: TestClient) -> None:
        assert_error(client.post(self.PATH, json={"fecha": "x"}), 400, "bad_request")

    def test_create_relationship_missing_endpoint(self, client: TestClient) -> None:
        response = client.post(self.PATH, json={"a": 1, "b": 2, "c": 3})

        assert_error(response, 404, "not_found")

    def test_read_relationships(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_query.return_value = [
            {
                "r": {"estado": "Activo"},
                "start_id": 1,
                "start_labels": ["Usuario"],
                "end_id": 2,
                "end_labels": ["Usuario"],
            }
        ]

        response = client.get("/relations/read/SIGUE_A")

        assert response.status_code == 200
        relation = response.json()["relations"][0]
        assert relation["type"] == "SIGUE_A"
        assert relation["start_id"] == 1
        assert relation["end_labels"] == ["Usuario"]

    def test_update_relationship(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_single.return_value = {"r": {"estado": "Inactivo"}}

        response = client.put(
            "/relations/update/Usuario/1/SIGUE_A/Usuario/2", json={"estado": "Inactivo"}
        )

        assert response.status_code == 200
        assert response.json()["relation"] == {"estado": "Inactivo"}

    def test_bulk_update_relationships(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_single.return_value = {"updated_count": 4}

        response = client.patch(
            "/relations/update/SIGUE_A",
            json={"filter": {"estado": "Activo"}, "properties": {"visto": True}},
        )

        assert response.json()["updated_count"] == 4

    def test_delete_relationship(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        bind_transaction(mock_neo4j_client, FakeTransaction([{"r": {}}]))

        response = client.delete(self.PATH)

        assert response.status_code == 200

    def test_bulk_delete_nothing_matched(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        bind_transaction(mock_neo4j_client, FakeTransaction([{"total": 0}]))

        response = client.request(
            "DELETE", "/relations/SIGUE_A", json={"filter": {"estado": "x"}}
        )

        assert_error(response, 404, "not_found")

    def test_invalid_relation_type(self, client: TestClient) -> None:
        response = client.post(
            "/relations/Usuario/1/%2A%2A/Usuario/2", json={"a": 1, "b": 2, "c": 3}
        )

        assert_error(response, 400, "bad_request")


# =============================================================================
# Analytics and Reports
# =============================================================================


class TestAnalyticsRoutes:
    def test_recommend_publications(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_query.return_value = [
            {"publication": {"título": "Grafos"}, "category": {"nombre": "IA"}}
        ]

        response = client.get("/queries/recommend-publications/1")

        assert response.status_code == 200
        assert response.json()["publications"][0]["category"] == {"nombre": "IA"}

    def test_influential_users_by_impact(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_query.return_value = [{"name": "Ana", "total_impact": 17}]

        response = client.get("/queries/influential-users")

        assert response.json() == {"influential_users": [{"name": "Ana", "total_impact": 17}]}

    def test_advanced_trending_uses_advanced_limit(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        client.get("/advanced/trending-categories")

        assert mock_neo4j_client.run_query.call_args.args[1]["limit"] == 10

    def test_network_summary(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        mock_neo4j_client.run_query.return_value = [
            {"type": "node", "name": "Usuario", "count": 3},
            {"type": "relationship", "name": "SIGUE_A", "count": 2},
        ]

        response = client.get("/advanced/network-summary")

        assert response.status_code == 200
        assert [entry["type"] for entry in response.json()["network_summary"]] == [
            "node",
            "relationship",
        ]

    def test_publication_ranking(
        self, client: TestClient, mock_neo4j_client: MagicMock
    ) -> None:
        mock_neo4j_client.run_query.return_value = [
            {"title": "Grafos", "citations": 4, "reactions": 2, "comments": 1, "reputation": 11}
        ]

        response = client.get("/api/ranking/publications")

        assert response.json()["publications"][0]["reputation"] == 11

    def test_research_trends(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        mock_neo4j_client.run_query.return_value = [
            {"category": "IA", "recent_publications": 5}
        ]

        response = client.get("/api/trends/research")

        assert response.json() == {"trends": [{"category": "IA", "recent_publications": 5}]}


class TestExportRoutes:
    ROWS = [{"name": "Ana", "role": "estudiante", "university": "UNAM", "reputation": 12}]

    def test_csv_attachment(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        mock_neo4j_client.run_query.return_value = self.ROWS

        response = client.get("/api/export/users/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="users.csv"' in response.headers["content-disposition"]
        assert response.text.splitlines()[0] == "Name,Role,University,Reputation"
        assert "Ana,estudiante,UNAM,12" in response.text

    def test_pdf_attachment(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        mock_neo4j_client.run_query.return_value = self.ROWS

        response = client.get("/api/export/users/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="users.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")


# =============================================================================
# Health
# =============================================================================


class TestHealthRoutes:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client: TestClient) -> None:
        assert client.get("/api/health/ready").status_code == 200

    def test_not_ready(self, client: TestClient, mock_neo4j_client: MagicMock) -> None:
        mock_neo4j_client.verify_connectivity = AsyncMock(return_value=False)

        assert client.get("/api/health/ready").status_code == 503

    def test_docs_served_at_api_docs(self, client: TestClient) -> None:
        assert client.get("/api-docs").status_code == 200
