"""End-to-end tests for the health endpoint."""


def test_health(api):
    response = api.client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
