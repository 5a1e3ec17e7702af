"""
Tests for the health check and API root endpoints.
"""


def test_health_check_returns_200(client):
    """
    Verify the health endpoint responds with HTTP 200.

    No token is needed: load balancers call it anonymously.
    """
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    """
    Verify the response includes the correct service name.

    Monitoring systems parse this field.
    """
    response = client.get("/health")
    data = response.json()
    assert data["service"] == "personnel-records"


def test_health_check_reports_database_status(client):
    response = client.get("/health")
    data = response.json()
    assert data["database"] in ("healthy", "unhealthy")
    assert data["status"] in ("healthy", "degraded")


def test_api_root_identifies_service(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json() == {"message": "Government Records API"}
