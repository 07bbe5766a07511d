"""Tests for device storage and the local snapshot store."""

import json

import pytest

from liftlog.db import MARKER_KEY, SNAPSHOT_KEY
from liftlog.models.migration import MigrationMarker


class TestDeviceStorageRepository:
    """Tests for DeviceStorageRepository."""

    @pytest.mark.asyncio
    async def test_get_missing(self, storage):
        assert await storage.get_item("nope") is None
        assert not await storage.has_item("nope")

    @pytest.mark.asyncio
    async def test_set_and_overwrite(self, storage):
        await storage.set_item("k", "one")
        await storage.set_item("k", "two")

        assert await storage.get_item("k") == "two"
        assert await storage.has_item("k")

    @pytest.mark.asyncio
    async def test_remove(self, storage):
        await storage.set_item("k", "one")
        await storage.remove_item("k")
        await storage.remove_item("k")

        assert await storage.get_item("k") is None


class TestIsMigrationNeeded:
    """Tests for LocalSnapshotStore.is_migration_needed."""

    @pytest.mark.asyncio
    async def test_empty_device(self, store):
        assert not await store.is_migration_needed()

    @pytest.mark.asyncio
    async def test_snapshot_without_marker(self, store, sample_snapshot):
        await store.write_snapshot(sample_snapshot)
        assert await store.is_migration_needed()

    @pytest.mark.asyncio
    async def test_marker_wins_over_snapshot(self, store, sample_snapshot):
        """Test a leftover snapshot never re-triggers migration."""
        await store.write_snapshot(sample_snapshot)
        await store.write_marker(MigrationMarker.for_skip())

        assert not await store.is_migration_needed()

    @pytest.mark.asyncio
    async def test_unparseable_marker_still_counts(self, store, storage, sample_snapshot):
        await store.write_snapshot(sample_snapshot)
        await storage.set_item(MARKER_KEY, "not json")

        assert not await store.is_migration_needed()

    @pytest.mark.asyncio
    async def test_corrupt_snapshot_still_counts(self, store, storage):
        """Test presence alone makes migration needed."""
        await storage.set_item(SNAPSHOT_KEY, "{broken")
        assert await store.is_migration_needed()


class TestReadSnapshot:
    """Tests for LocalSnapshotStore.read_snapshot."""

    @pytest.mark.asyncio
    async def test_missing(self, store):
        assert await store.read_snapshot() is None

    @pytest.mark.asyncio
    async def test_round_trip(self, store, sample_snapshot):
        await store.write_snapshot(sample_snapshot)
        snapshot = await store.read_snapshot()

        assert snapshot == sample_snapshot

    @pytest.mark.asyncio
    async def test_reads_device_shape(self, store, storage):
        await storage.set_item(
            SNAPSHOT_KEY,
            json.dumps(
                {
                    "workouts": [
                        {
                            "id": "1700000000000",
                            "exerciseName": "squat",
                            "reps": 5,
                            "weight": 100,
                            "date": "2024-01-02",
                            "createdAt": "2024-01-02T09:00:00.000Z",
                        }
                    ],
                    "exerciseLibrary": ["squat"],
                }
            ),
        )

        snapshot = await store.read_snapshot()

        assert snapshot.workouts[0].id == "1700000000000"
        assert snapshot.workouts[0].exercise_name == "squat"
        assert snapshot.body_weights == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["{broken", "[1, 2]", "null", '{"workouts": 5}'])
    async def test_corrupt_returns_none(self, store, storage, raw):
        await storage.set_item(SNAPSHOT_KEY, raw)
        assert await store.read_snapshot() is None

    @pytest.mark.asyncio
    async def test_malformed_entry_kept(self, store, storage):
        """Test one bad entry leaves the rest of the snapshot readable."""
        bad = {"exerciseName": "row", "weight": 50, "date": "2024-01-02"}
        await storage.set_item(
            SNAPSHOT_KEY,
            json.dumps(
                {
                    "workouts": [
                        {"exerciseName": "squat", "reps": 5, "weight": 100, "date": "2024-01-01"},
                        bad,
                    ]
                }
            ),
        )

        snapshot = await store.read_snapshot()

        assert len(snapshot.workouts) == 1
        assert snapshot.unreadable_workouts == [bad]

        await store.write_snapshot(snapshot)
        again = await store.read_snapshot()
        assert again.unreadable_workouts == [bad]


class TestClearSnapshot:
    """Tests for LocalSnapshotStore.clear_snapshot."""

    @pytest.mark.asyncio
    async def test_clear(self, store, sample_snapshot):
        await store.write_snapshot(sample_snapshot)
        await store.clear_snapshot()

        assert await store.read_snapshot() is None

    @pytest.mark.asyncio
    async def test_clear_missing_is_noop(self, store):
        await store.clear_snapshot()
        assert await store.read_snapshot() is None

    @pytest.mark.asyncio
    async def test_clear_keeps_marker(self, store, sample_snapshot):
        await store.write_snapshot(sample_snapshot)
        await store.write_marker(MigrationMarker.for_migration("user-1"))
        await store.clear_snapshot()

        assert await store.read_marker() is not None


class TestMarker:
    """Tests for the migration marker."""

    @pytest.mark.asyncio
    async def test_missing(self, store):
        assert await store.read_marker() is None

    @pytest.mark.asyncio
    async def test_write_and_read(self, store):
        await store.write_marker(MigrationMarker.for_migration("user-1"))
        marker = await store.read_marker()

        assert marker.account_id == "user-1"
        assert marker.data_moved_to_remote
        assert not marker.skipped
        assert marker.migrated_at is not None

    @pytest.mark.asyncio
    async def test_stored_shape(self, store, storage):
        await store.write_marker(MigrationMarker.for_skip())
        data = json.loads(await storage.get_item(MARKER_KEY))

        assert data["skipped"] is True
        assert data["dataMovedToRemote"] is False
        assert "migratedAt" in data

    @pytest.mark.asyncio
    async def test_unparseable_marker(self, store, storage):
        await storage.set_item(MARKER_KEY, "garbage")
        marker = await store.read_marker()

        assert marker.migrated_at is None
        assert marker.data_moved_to_remote

    @pytest.mark.asyncio
    async def test_reset(self, store, sample_snapshot):
        await store.write_snapshot(sample_snapshot)
        await store.write_marker(MigrationMarker.for_skip())
        await store.reset_marker()

        assert await store.read_marker() is None
        assert await store.is_migration_needed()
