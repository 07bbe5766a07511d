"""Pre-migration snapshot and migration marker on the device."""

import json
import logging

import aiosqlite

from ..models.migration import LocalSnapshot, MigrationMarker
from .repositories import DeviceStorageRepository

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "workout-tracker-data"
MARKER_KEY = "workout-tracker-migrated"


class LocalSnapshotStore:
    """Reads the local snapshot and reads/writes the migration marker.

    The marker goes from absent to written once (by a skip or a clean
    migration). Once present, migration is never offered again on this
    device, whichever account is signed in.
    """

    def __init__(self, storage: DeviceStorageRepository | None = None):
        self.storage = storage or DeviceStorageRepository()

    async def is_migration_needed(self) -> bool:
        """True iff no marker exists and a snapshot does.

        The marker is checked first so a leftover snapshot never
        re-triggers the prompt.
        """
        if await self.storage.get_item(MARKER_KEY):
            return False
        return bool(await self.storage.get_item(SNAPSHOT_KEY))

    async def read_snapshot(self) -> LocalSnapshot | None:
        """Read the local snapshot.

        Only a blob that is not JSON, or not shaped like a snapshot, counts
        as corrupt. Single malformed entries are kept on the snapshot and
        reported by the migration.

        Returns:
            The parsed snapshot, or None if it is missing or corrupt.
            Corrupt data is logged, not raised.
        """
        raw = await self.storage.get_item(SNAPSHOT_KEY)
        if not raw:
            return None

        try:
            return LocalSnapshot.from_dict(json.loads(raw))
        except (ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable local snapshot: %s", e)
            return None

    async def write_snapshot(self, snapshot: LocalSnapshot) -> None:
        """Replace the local snapshot."""
        await self.storage.set_item(SNAPSHOT_KEY, json.dumps(snapshot.to_dict()))

    async def clear_snapshot(self) -> None:
        """Delete the local snapshot. Errors are logged and ignored."""
        try:
            await self.storage.remove_item(SNAPSHOT_KEY)
        except (aiosqlite.Error, OSError) as e:
            logger.error("Error clearing local snapshot: %s", e)
            return
        logger.info("Local snapshot cleared")

    async def read_marker(self) -> MigrationMarker | None:
        """Read the migration marker, or None if there is none.

        A marker that cannot be parsed still counts as a completed
        migration with an unknown timestamp.
        """
        raw = await self.storage.get_item(MARKER_KEY)
        if not raw:
            return None

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return MigrationMarker.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.warning("Unreadable migration marker: %s", e)
            return MigrationMarker(migrated_at=None, data_moved_to_remote=True)

    async def write_marker(self, marker: MigrationMarker) -> None:
        """Persist the marker, overwriting any existing one."""
        await self.storage.set_item(MARKER_KEY, json.dumps(marker.to_dict()))

    async def reset_marker(self) -> None:
        """Remove the marker so migration can be offered again."""
        await self.storage.remove_item(MARKER_KEY)
        logger.info("Migration marker reset")
