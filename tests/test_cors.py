"""CORS behaviour for the builder and platform browser origins."""

import pytest
from fastapi.testclient import TestClient

from onlyzines.main import app


client = TestClient(app)


def _preflight(origin: str, path: str = "/api/auth/login"):
    return client.options(
        path,
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization,content-type",
        },
    )


@pytest.mark.parametrize(
    "origin",
    ["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:8080"],
)
def test_local_dev_origins_pass_preflight(origin: str) -> None:
    response = _preflight(origin)

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == origin
    assert response.headers["access-control-allow-credentials"] == "true"


def test_unknown_origin_fails_preflight() -> None:
    response = _preflight("http://zine-scraper.example")

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_lookalike_localhost_domain_is_not_allowed() -> None:
    response = _preflight("http://localhost.attacker.example")

    assert response.status_code == 400


def test_simple_request_echoes_allowed_origin() -> None:
    response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
