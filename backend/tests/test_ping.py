import logging
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app import main as app_main
from app.main import app

client = TestClient(app)

def test_ping():
    r = client.get("/ping")
    assert r.status_code == 200
    assert r.json() == {"pong": True}

def test_healthz():
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_healthz_degraded_when_database_unreachable(monkeypatch, tmp_path, caplog):
    # a SQLite file inside a directory that does not exist cannot be opened
    missing = tmp_path / "gone" / "liftlog.db"
    unreachable = sessionmaker(bind=create_engine(f"sqlite:///{missing}"))
    monkeypatch.setattr(app_main, "SessionLocal", unreachable)

    with caplog.at_level(logging.ERROR, logger="uvicorn"):
        r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "degraded", "database": "unreachable"}
    assert str(missing) not in r.text
    assert "database unreachable" in caplog.text

def test_version():
    r = client.get("/version")
    assert r.status_code == 200
    assert "version" in r.json()

def test_request_id_echoed():
    r = client.get("/ping", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
