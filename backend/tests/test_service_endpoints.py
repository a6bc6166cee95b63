from fastapi.testclient import TestClient
from gymapp.main import app
from gymapp import main as app_main

client = TestClient(app)

def test_root_names_the_api():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "name": "Gym Tracker API"}

def test_ping():
    r = client.get("/ping")
    assert r.status_code == 200
    assert r.json() == {"pong": True}

def test_request_id_is_echoed_or_minted():
    r = client.get("/ping", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
    assert client.get("/ping").headers["X-Request-ID"]

def test_healthz_ok_against_test_db():
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_healthz_degraded(monkeypatch):
    # force SessionLocal to throw
    class Boom:
        def __enter__(self): raise RuntimeError("db down")
        def __exit__(self, *a): return False
    monkeypatch.setattr(app_main, "SessionLocal", lambda: Boom())
    r = client.get("/healthz")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "degraded"
    assert "db down" in body["error"]

def test_version(monkeypatch):
    monkeypatch.setenv("API_VERSION", "1.2.3")
    assert client.get("/version").json() == {"version": "1.2.3"}

def test_workout_registry_lives_on_app():
    assert hasattr(app.state, "workouts")
