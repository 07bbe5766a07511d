"""Data access layer for liftlog device storage."""

from pathlib import Path

import aiosqlite

from .engine import get_db_path


class DeviceStorageRepository:
    """String key-value storage on the device.

    Values are opaque text; callers own serialization.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_item(self, key: str) -> str | None:
        """Get the value stored under a key, or None if absent."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT value FROM device_storage WHERE key = ?", (key,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row[0]

    async def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any existing one."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO device_storage (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            await db.commit()

    async def remove_item(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM device_storage WHERE key = ?", (key,))
            await db.commit()

    async def has_item(self, key: str) -> bool:
        """Check whether a key is present."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT 1 FROM device_storage WHERE key = ?", (key,)
            )
            return await cursor.fetchone() is not None
