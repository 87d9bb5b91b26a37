# tests/test_health.py
from typing import Any


def test_health(client: Any) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_root_describes_api(client: Any) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["docs"] == "/docs"


def test_system_health_probes_database(client: Any) -> None:
    r = client.get("/api/v1/system/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "healthy"
    assert data["components"]["database"] == "healthy"
