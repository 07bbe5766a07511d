"""Tests for the migration API."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from liftlog.db import DeviceStorageRepository, LocalSnapshotStore, init_db
from liftlog.models.migration import MigrationState
from liftlog.services.migration import MigrationService
from liftlog.web import create_app


@pytest.fixture
def web_store(temp_db_path):
    asyncio.run(init_db(temp_db_path))
    return LocalSnapshotStore(DeviceStorageRepository(temp_db_path))


@pytest.fixture
def service(web_store, gateway):
    return MigrationService(web_store, gateway)


@pytest.fixture
def app(service):
    return create_app(service)


@pytest.fixture
def client(app):
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_status_nothing_to_migrate(client):
    response = client.get("/migration/status")

    assert response.status_code == 200
    assert response.json() == {"needed": False, "state": "not_checked", "marker": None}


def test_preview(client, web_store, sample_snapshot):
    assert client.get("/migration/preview").json() == {"available": False}

    asyncio.run(web_store.write_snapshot(sample_snapshot))
    data = client.get("/migration/preview").json()

    assert data["available"] is True
    assert data["counts"] == {"workouts": 1, "body_weights": 1, "exercises": 1}
    assert data["exercises"] == ["Bench Press"]


def test_run_completes(client, web_store, gateway, sample_snapshot):
    asyncio.run(web_store.write_snapshot(sample_snapshot))

    data = client.post("/migration/run").json()

    assert data["status"] == "completed"
    assert data["result"]["success"] is True
    assert data["result"]["workoutsMigrated"] == 1
    assert data["errorPreview"] == []
    assert len(gateway.workouts) == 1

    status = client.get("/migration/status").json()
    assert status["needed"] is False
    assert status["state"] == "completed"
    assert status["marker"]["userId"] == "user-1"

    assert client.post("/migration/run").json() == {"status": "not_needed"}


def test_run_partial(client, web_store, gateway, sample_snapshot):
    asyncio.run(web_store.write_snapshot(sample_snapshot))
    gateway.fail_workouts.add("Bench Press")

    data = client.post("/migration/run").json()

    assert data["status"] == "partial"
    assert data["errorPreview"] == ["Failed to migrate workout: bench press on 2024-01-01"]
    assert client.get("/migration/status").json()["needed"] is True


def test_run_rejected_while_migrating(client, service, web_store, gateway, sample_snapshot):
    asyncio.run(web_store.write_snapshot(sample_snapshot))
    service.state = MigrationState.MIGRATING

    response = client.post("/migration/run")

    assert response.status_code == 409
    assert response.json()["detail"] == "Migration already in progress"
    assert gateway.calls == []


def test_run_rejected_while_lock_held(app, client, web_store, gateway, sample_snapshot):
    """Test a second run is refused while another request holds the lock."""
    asyncio.run(web_store.write_snapshot(sample_snapshot))

    with client:
        lock = app.state.migration_lock
        client.portal.call(lock.acquire)
        try:
            response = client.post("/migration/run")
        finally:
            client.portal.call(lock.release)

    assert response.status_code == 409
    assert gateway.workouts == []


def test_run_unauthenticated(client, web_store, gateway, sample_snapshot):
    asyncio.run(web_store.write_snapshot(sample_snapshot))
    gateway.account_id = None

    data = client.post("/migration/run").json()

    assert data["status"] == "failed"
    assert data["result"]["errors"] == ["User must be authenticated to migrate data"]


def test_skip(client, web_store, sample_snapshot):
    asyncio.run(web_store.write_snapshot(sample_snapshot))

    assert client.post("/migration/skip").json() == {"status": "skipped"}

    status = client.get("/migration/status").json()
    assert status["needed"] is False
    assert status["state"] == "skipped"
    assert status["marker"]["skipped"] is True


def test_session(client):
    assert client.get("/auth/session").json() == {"accountId": "user-1"}


def test_sign_in_unsupported(client):
    response = client.post("/auth/sign-in", data={"email": "a@b.c", "password": "x"})
    assert response.status_code == 501
