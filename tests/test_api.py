"""Tests for the HTTP surface over the generation engine."""

from fastapi.testclient import TestClient

from trpg_mapgen.api.main import app


CORE_LOCATIONS = [
    {"id": "core-1", "name": "Capital", "kind": "core", "x": 200, "y": 200},
    {"id": "core-2", "name": "Port", "kind": "core", "x": 800, "y": 200},
    {"id": "core-3", "name": "Keep", "kind": "core", "x": 200, "y": 600},
    {"id": "core-4", "name": "Abbey", "kind": "core", "x": 800, "y": 600},
]


class TestAPIEndpoints:
    """Test the generation endpoints."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def test_root(self):
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self):
        response = self.client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_generate_map(self):
        response = self.client.post(
            "/generate/map",
            json={
                "locations": CORE_LOCATIONS,
                "parameters": {"outer_node_count": 8, "avg_degree": 2.5},
                "seed": 17,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["locations"]) == 12
        assert len(data["connections"]) >= 11

    def test_generate_map_is_reproducible(self):
        body = {"locations": CORE_LOCATIONS, "parameters": {"outer_node_count": 6}, "seed": "elf"}
        first = self.client.post("/generate/map", json=body).json()
        second = self.client.post("/generate/map", json=body).json()
        assert first == second

    def test_regenerate_outer_keeps_manual(self):
        locations = CORE_LOCATIONS + [
            {"id": "inn", "name": "Inn", "kind": "outer", "x": 500, "y": 400},
            {"id": "old", "name": "Old", "kind": "outer", "x": 520, "y": 100, "auto_generated": True},
        ]
        response = self.client.post(
            "/generate/outer",
            json={"locations": locations, "parameters": {"outer_node_count": 6}, "seed": 3},
        )
        assert response.status_code == 200
        ids = {loc["id"] for loc in response.json()["locations"]}
        assert "inn" in ids
        assert "old" not in ids

    def test_generate_connections(self):
        locations = CORE_LOCATIONS + [
            {"id": "o1", "name": "Mill", "kind": "outer", "x": 500, "y": 150},
            {"id": "o2", "name": "Ford", "kind": "outer", "x": 500, "y": 650},
            {"id": "o3", "name": "Camp", "kind": "outer", "x": 150, "y": 400},
            {"id": "o4", "name": "Tower", "kind": "outer", "x": 850, "y": 400},
        ]
        response = self.client.post(
            "/generate/connections",
            json={"locations": locations, "parameters": {"avg_degree": 2.0}, "seed": 1},
        )
        assert response.status_code == 200
        data = response.json()
        assert [loc["id"] for loc in data["locations"]] == [loc["id"] for loc in locations]
        for conn in data["connections"]:
            assert conn["weight"] == 1.0
            assert conn["directed"] is False

    def test_generate_connections_ignores_stored_outer_count(self):
        locations = CORE_LOCATIONS + [
            {"id": "o1", "name": "Mill", "kind": "outer", "x": 500, "y": 150},
            {"id": "o2", "name": "Ford", "kind": "outer", "x": 500, "y": 650},
        ]
        response = self.client.post(
            "/generate/connections",
            json={
                "locations": locations,
                "parameters": {"outer_node_count": 100000, "avg_degree": 2.0},
                "seed": 1,
            },
        )
        assert response.status_code == 200

    def test_invalid_outer_parameters_is_400(self):
        response = self.client.post(
            "/generate/outer",
            json={"locations": CORE_LOCATIONS, "parameters": {"outer_node_count": 100000}},
        )
        assert response.status_code == 400
        assert "exceeds the limit" in response.json()["detail"]

    def test_invalid_parameters_is_400(self):
        response = self.client.post(
            "/generate/map",
            json={"locations": CORE_LOCATIONS, "parameters": {"outer_node_count": -1}},
        )
        assert response.status_code == 400
        assert "negative" in response.json()["detail"]

    def test_infeasible_is_422(self):
        response = self.client.post(
            "/generate/connections",
            json={"locations": CORE_LOCATIONS, "parameters": {"avg_degree": 2.0}},
        )
        assert response.status_code == 422
        assert "outer location" in response.json()["detail"]

    def test_validate(self):
        locations = [
            {"id": "a", "name": "A", "kind": "core", "x": 0, "y": 0},
            {"id": "b", "name": "B", "kind": "outer", "x": 10, "y": 0},
        ]
        connections = [{"id": "ab", "source_id": "a", "target_id": "b"}]
        response = self.client.post(
            "/validate", json={"locations": locations, "connections": connections}
        )
        assert response.status_code == 200
        assert response.json() == {"valid": True, "violations": []}

        response = self.client.post("/validate", json={"locations": locations, "connections": []})
        data = response.json()
        assert data["valid"] is False
        assert len(data["violations"]) == 4
