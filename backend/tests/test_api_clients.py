"""Tests for clients API endpoints."""

import pytest


class TestClientsAPI:
    """Test clients CRUD endpoints."""

    def test_list_clients_empty(self, client):
        response = client.get("/api/v1/clients")
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}

    def test_create_client(self, client):
        response = client.post("/api/v1/clients", json={
            "name": "Tomás",
            "last_name": "Undurraga",
            "email": "tomas@example.cl",
            "phone": "+56 2 2345 6789",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Tomás"
        assert data["email"] == "tomas@example.cl"
        assert "id" in data

    @pytest.mark.parametrize("email", ["tomas", "tomas@example", "@example.cl"])
    def test_invalid_email(self, client, email):
        response = client.post("/api/v1/clients", json={"name": "Tomás", "email": email})
        assert response.status_code == 422

    def test_email_optional(self, client):
        response = client.post("/api/v1/clients", json={"name": "Tomás", "email": ""})
        assert response.status_code == 201

    def test_update_client(self, client, sample_client):
        response = client.patch(f"/api/v1/clients/{sample_client.id}", json={"phone": "+56 9 8765 4321"})
        assert response.status_code == 200
        assert response.json()["phone"] == "+56 9 8765 4321"
        assert response.json()["name"] == "Isidora"

    def test_update_invalid_email(self, client, sample_client):
        response = client.patch(f"/api/v1/clients/{sample_client.id}", json={"email": "nope"})
        assert response.status_code == 422

    def test_delete_client_detaches_projects(self, client, sample_project, sample_client):
        response = client.delete(f"/api/v1/clients/{sample_client.id}")
        assert response.status_code == 204

        project = client.get(f"/api/v1/projects/{sample_project.id}").json()
        assert project["main_client_id"] is None

    def test_delete_missing(self, client):
        response = client.delete("/api/v1/clients/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Client missing not found"
