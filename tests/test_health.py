from fastapi.testclient import TestClient

from onlyzines.main import app


client = TestClient(app)


def test_root_reports_ok() -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_health_endpoint_reports_service() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "service": "OnlyZines API",
        "version": "0.1.0",
    }


def test_api_health_includes_timestamp() -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "timestamp" in body
