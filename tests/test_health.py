import pytest
from sqlalchemy.exc import OperationalError

from roi_api.core.config import settings
from roi_api.db import crud
from roi_api.routers import health

procfs = pytest.mark.skipif(not health.STATM.exists(), reason="needs /proc/self/statm")

BLOB_MB = 200


@pytest.fixture
def roomy(monkeypatch):
    """Limits loose enough that only the check under test can fail."""
    monkeypatch.setattr(settings, "MEMORY_RSS_LIMIT_MB", 1_000_000)
    monkeypatch.setattr(settings, "DISK_THRESHOLD_PERCENT", 1.0)


def test_liveness(client):
    body = client.get("/health/liveness").json()
    assert body["status"] == "ok"
    assert body["uptime"] >= 0
    assert "timestamp" in body


def test_readiness(client):
    resp = client.get("/health/readiness")
    assert resp.status_code == 200
    assert resp.json()["details"]["database"]["status"] == "up"


def test_full_health_check(client, roomy):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert set(body["details"]) == {"database", "memory_rss", "disk"}
    assert body["error"] == {}


def test_memory_over_limit_reports_503(client, roomy, monkeypatch):
    monkeypatch.setattr(settings, "MEMORY_RSS_LIMIT_MB", 0)
    resp = client.get("/health")
    assert resp.status_code == 503
    assert set(resp.json()["error"]) == {"memory_rss"}


def test_disk_over_threshold_reports_503(client, roomy, monkeypatch):
    monkeypatch.setattr(settings, "DISK_THRESHOLD_PERCENT", 0.0)
    resp = client.get("/health")
    assert resp.status_code == 503
    disk = resp.json()["error"]["disk"]
    assert disk["path"] == settings.DISK_PATH
    assert disk["usedPercent"] > 0


def test_readiness_database_down(client, monkeypatch):
    async def _down(db):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(crud, "ping", _down)
    resp = client.get("/health/readiness")
    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "error"
    assert body["error"]["database"]["status"] == "down"


def test_rss_is_positive():
    assert health._rss_mb() > 0


def test_rss_falls_back_without_procfs(monkeypatch, tmp_path):
    monkeypatch.setattr(health, "STATM", tmp_path / "missing")
    assert health._rss_mb() > 0


@procfs
def test_rss_drops_after_memory_is_released():
    before = health._rss_mb()

    blob = b"x" * (BLOB_MB * 1024 * 1024)
    assert health._rss_mb() > before + BLOB_MB / 2
    del blob

    assert health._rss_mb() < before + BLOB_MB / 2


@procfs
def test_memory_check_recovers_after_release(client, roomy, monkeypatch):
    monkeypatch.setattr(settings, "MEMORY_RSS_LIMIT_MB", int(health._rss_mb()) + 100)

    blob = b"x" * (BLOB_MB * 1024 * 1024)
    assert client.get("/health").status_code == 503
    del blob

    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["details"]["memory_rss"]["status"] == "up"
