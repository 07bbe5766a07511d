"""Device storage setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import DATA_DIR


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the device storage file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "liftlog.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the device storage schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Key-value blobs (local snapshot, migration marker)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS device_storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.commit()
