import asyncio

from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.config.settings import Settings
from backend.app.routers.health import health_router
from tests.conftest import FakeDatabase


class SlowDatabase(FakeDatabase):
    async def ping(self) -> bool:
        await asyncio.sleep(1)
        return True


def test_health_is_always_200(backend_app):
    client = TestClient(backend_app)
    for path in ("/health", "/api/health"):
        r = client.get(path)
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "OK"
        assert body["message"] == "RemotCyberHelp API is running"
        assert body["environment"] == "development"
        assert body["version"] == "1.0.0"


def test_health_does_not_need_database():
    app = FastAPI()
    app.include_router(health_router)
    client = TestClient(app)
    assert client.get("/health").status_code == 200


def test_ready_503_when_database_missing():
    app = FastAPI()
    app.include_router(health_router)
    client = TestClient(app)
    r = client.get("/health/ready")
    assert r.status_code == 503


def test_ready_503_when_db_ping_fails(backend_app):
    backend_app.state.database = FakeDatabase(ping_ok=False)
    client = TestClient(backend_app)
    r = client.get("/health/ready")
    assert r.status_code == 503


def test_ready_503_when_db_ping_times_out(backend_app):
    backend_app.state.database = SlowDatabase()
    backend_app.state.settings = Settings(readiness_ping_timeout_seconds=0.01)
    client = TestClient(backend_app)
    r = client.get("/health/ready")
    assert r.status_code == 503


def test_ready_200_when_ready(backend_app):
    client = TestClient(backend_app)
    r = client.get("/health/ready")
    assert r.status_code == 200
    assert r.text == "OK"
