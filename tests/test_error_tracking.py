# tests/test_error_tracking.py
import sentry_sdk
from fastapi.testclient import TestClient

from telerelay.config import Settings
from telerelay.main import app, init_error_tracking
from telerelay.services.lookup_service import get_lookup_service


def test_init_error_tracking_with_dsn(monkeypatch):
    seen = {}
    monkeypatch.setattr(sentry_sdk, "init", lambda **kwargs: seen.update(kwargs))
    settings = Settings(
        _env_file=None,
        ENV="staging",
        SENTRY_DSN="https://public@sentry.example.com/1",
        SENTRY_TRACES_SAMPLE_RATE=0.5,
    )

    assert init_error_tracking(settings) is True
    assert seen == {
        "dsn": "https://public@sentry.example.com/1",
        "environment": "staging",
        "traces_sample_rate": 0.5,
        "profiles_sample_rate": 1.0,
    }


def test_init_error_tracking_without_dsn(monkeypatch):
    calls = []
    monkeypatch.setattr(sentry_sdk, "init", lambda **kwargs: calls.append(kwargs))

    assert init_error_tracking(Settings(_env_file=None, SENTRY_DSN=None)) is False
    assert calls == []


def test_unexpected_error_returns_event_id(monkeypatch):
    class ExplodingLookups:
        def lookup(self, phone_number):
            raise RuntimeError("boom")

    monkeypatch.setattr(sentry_sdk, "capture_exception", lambda exc: "8f2c0a7d5e3b4c1a9d6e2f0b7a4c3d1e")
    app.dependency_overrides[get_lookup_service] = lambda: ExplodingLookups()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.post("/lookup", json={"phoneNumber": "+15706200103"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json()["error"] == {
        "kind": "internal_error",
        "message": "Internal server error",
        "eventId": "8f2c0a7d5e3b4c1a9d6e2f0b7a4c3d1e",
    }


def test_debug_sentry_raises_outside_prod(client, settings):
    settings.ENV = "dev"
    lenient = TestClient(app, raise_server_exceptions=False)

    resp = lenient.get("/debug-sentry")

    assert resp.status_code == 500
    assert resp.json()["error"]["kind"] == "internal_error"
    assert "My first Sentry error" not in resp.text


def test_debug_sentry_hidden_in_prod(client, settings):
    settings.ENV = "prod"

    resp = client.get("/debug-sentry")

    assert resp.status_code == 404
    assert resp.json() == {"error": {"kind": "not_found", "message": "Not Found"}}
