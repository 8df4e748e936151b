"""
Test the HTTP API with a scripted pipeline and an in-memory store.

Usage: pytest scripts/test_api.py
"""

import asyncio
import sys
import threading
import time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fakes import PM_PROFILE, FakePipeline, candidate, make_context, memory_store

from sentinel.api.app import app
from sentinel.api.deps import Runtime
from sentinel.api.limiter import limiter
from sentinel.core.models import DEFAULT_COMPANIES, SAMPLE_RESUME
from sentinel.core.profile_store import ProfileStore
from sentinel.db import SnapshotStore
from sentinel.errors import ExternalServiceError, PersistenceError


@pytest.fixture
def runtime():
    limiter.reset()
    pipeline = FakePipeline()
    rt = Runtime(
        make_context([("OpenAI", "openai.com")], profile=None, store=memory_store()),
        pipeline_factory=lambda: pipeline,
        scan_pause=0,
        cycle_interval=3600,
    )
    rt.fake_pipeline = pipeline
    app.state.runtime = rt
    yield rt
    app.state.runtime = None


@pytest.fixture
def client(runtime):
    with TestClient(app) as c:
        yield c


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


# Profile

def test_source_text_then_lock(client, runtime):
    response = client.put("/profile/source", json={"text": "Senior PM with 8 years."})
    assert response.status_code == 200
    assert response.json()["locked"] is False

    response = client.post("/profile/lock")
    assert response.status_code == 200
    body = response.json()
    assert body["locked"] is True
    assert body["profile"]["target_roles"][0] == "Senior PM"
    assert body["profile"]["source_text"] == "Senior PM with 8 years."

    # Replacing the text unlocks the profile
    response = client.put("/profile/source", json={"text": "Data engineer"})
    assert response.json()["locked"] is False
    assert runtime.context.profile is None
    print("[OK] Profile lock and invalidation")


def test_lock_blank_text_is_rejected(client):
    response = client.post("/profile/lock")
    assert response.status_code == 400


def test_lock_failure_returns_502(client, runtime):
    runtime.fake_pipeline.profile_error = ExternalServiceError("quota exceeded")
    client.put("/profile/source", json={"text": "Senior PM"})

    response = client.post("/profile/lock")

    assert response.status_code == 502
    assert "quota exceeded" in response.json()["detail"]
    assert client.get("/profile").json()["locked"] is False


def test_lock_without_model_key_returns_503(runtime):
    def missing_key():
        raise ValueError("DEEPSEEK_API_KEY not set")

    runtime._pipeline_factory = missing_key
    with TestClient(app) as client:
        client.put("/profile/source", json={"text": "Senior PM"})
        response = client.post("/profile/lock")
    assert response.status_code == 503


def test_upload_text_resume(client, runtime):
    response = client.post(
        "/profile/upload",
        files={"file": ("resume.txt", b"Program manager, Agile, Jira", "text/plain")},
    )
    assert response.status_code == 200
    assert response.json()["source_text"] == "Program manager, Agile, Jira"
    assert any("resume.txt" in e.message for e in runtime.context.activity.recent())


def test_upload_rejects_unsupported_type(client):
    response = client.post(
        "/profile/upload",
        files={"file": ("resume.docx", b"binary", "application/octet-stream")},
    )
    assert response.status_code == 400


def test_load_sample_resume(client):
    response = client.post("/profile/sample")
    assert response.status_code == 200
    assert response.json()["source_text"] == SAMPLE_RESUME


# Watchlist

def test_watchlist_add_and_remove(client):
    response = client.post("/watchlist", json={"name": "Figma", "domain": "figma.com"})
    assert response.status_code == 201
    entry = response.json()
    assert entry["scan_status"] == "idle"

    names = [e["name"] for e in client.get("/watchlist").json()["entries"]]
    assert names == ["OpenAI", "Figma"]

    assert client.post("/watchlist", json={"name": "Figma", "domain": "figma.com"}).status_code == 400
    assert client.delete(f"/watchlist/{entry['id']}").status_code == 200
    assert client.delete(f"/watchlist/{entry['id']}").status_code == 404


# Alerts

def test_alert_archive_toggle(client, runtime):
    alert = runtime.context.record_match("OpenAI", candidate("https://openai.com/jobs/55"), "Matches PM seniority.")

    active = client.get("/alerts").json()
    assert active["view"] == "active"
    assert [a["link"] for a in active["alerts"]] == ["https://openai.com/jobs/55"]

    response = client.post(f"/alerts/{alert.id}/archive")
    assert response.status_code == 200
    assert response.json()["archived"] is True

    assert client.get("/alerts").json()["alerts"] == []
    assert len(client.get("/alerts", params={"view": "archived"}).json()["alerts"]) == 1
    assert client.post("/alerts/missing/archive").status_code == 404
    print("[OK] Alert archive toggle")


# Monitor

def test_start_without_profile_is_rejected(client, runtime):
    response = client.post("/monitor/start")
    assert response.status_code == 409
    assert client.get("/monitor").json()["state"] == "STOPPED"
    assert runtime.fake_pipeline.calls == []


def test_start_and_stop_monitor(client, runtime):
    runtime.fake_pipeline.candidates = {"OpenAI": [candidate("https://openai.com/jobs/55")]}
    client.put("/profile/source", json={"text": "Senior PM"})
    client.post("/profile/lock")

    response = client.post("/monitor/start")
    assert response.status_code == 200
    assert response.json()["state"] == "RUNNING"

    deadline = time.monotonic() + 5
    while runtime.context.counters.total_matches == 0 and time.monotonic() < deadline:
        time.sleep(0.01)

    response = client.post("/monitor/stop")
    assert response.json()["state"] == "STOPPED"
    assert response.json()["stats"]["total_matches"] == 1
    print("[OK] Monitor start/stop")


# Dashboard, activity and reset

def test_dashboard(client):
    body = client.get("/dashboard").json()
    assert body["state"] == "STOPPED"
    assert body["profile"] is None
    assert body["stats"]["active_watchlist"] == 1
    assert [a["agent"] for a in body["agents"]] == ["PROFILER", "SCOUT", "CRITIC", "REPORTER"]


def test_activity_flush(client):
    client.post("/profile/sample")
    assert client.get("/activity").json()["entries"]

    assert client.delete("/activity").status_code == 200
    assert client.get("/activity").json()["entries"] == []


def test_reset_restores_defaults(client, runtime):
    runtime.context.record_match("OpenAI", candidate("https://openai.com/jobs/55"), "fit")
    client.put("/profile/source", json={"text": "Senior PM"})

    assert client.post("/reset").status_code == 200

    assert client.get("/alerts").json()["alerts"] == []
    assert client.get("/profile").json()["source_text"] == ""
    assert len(client.get("/watchlist").json()["entries"]) == len(DEFAULT_COMPANIES)
    assert runtime.context.store.restore() is None


def test_activity_limit_is_validated(client):
    client.post("/profile/sample")
    client.put("/profile/source", json={"text": "Senior PM"})

    entries = client.get("/activity", params={"limit": 1}).json()["entries"]
    assert len(entries) == 1

    assert client.get("/activity", params={"limit": -1}).status_code == 422
    assert client.get("/activity", params={"limit": 0}).status_code == 422
    assert client.get("/activity", params={"limit": 51}).status_code == 422


def test_stop_reports_stopping_until_step_finishes(client, runtime):
    runtime.context.profiles = ProfileStore(PM_PROFILE.source_text, PM_PROFILE)
    release = threading.Event()

    async def hold(org):
        await asyncio.to_thread(release.wait, 5)

    runtime.fake_pipeline.on_scout = hold
    client.post("/monitor/start")

    deadline = time.monotonic() + 5
    while not runtime.fake_pipeline.scouted() and time.monotonic() < deadline:
        time.sleep(0.01)

    body = client.post("/monitor/stop").json()
    assert body["state"] == "STOPPED"
    assert body["stopping"] is True

    release.set()
    deadline = time.monotonic() + 5
    while client.get("/monitor").json()["stopping"] and time.monotonic() < deadline:
        time.sleep(0.01)
    assert client.get("/monitor").json()["stopping"] is False


class UnclearableStore(SnapshotStore):
    def clear(self) -> None:
        raise PersistenceError("database is locked")


def test_reset_reports_storage_failure():
    limiter.reset()
    template = memory_store()
    store = UnclearableStore(template._session_factory, key=template.key)
    context = make_context([("OpenAI", "openai.com")], profile=None, store=store)
    context.replace_source_text("Senior PM")
    app.state.runtime = Runtime(context, pipeline_factory=FakePipeline, scan_pause=0, cycle_interval=3600)
    try:
        with TestClient(app) as client:
            response = client.post("/reset")
            assert response.status_code == 500
            assert response.json() == {"detail": "Storage unavailable"}
            assert client.get("/profile").json()["source_text"] == "Senior PM"
    finally:
        app.state.runtime = None
