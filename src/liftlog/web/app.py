"""FastAPI application exposing the migration workflow."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..clients.supabase import SupabaseGateway
from ..config import load_settings
from ..db import DeviceStorageRepository, LocalSnapshotStore, get_db_path, init_db
from ..services.migration import MigrationService
from .routers import auth, migration


async def build_default_service() -> MigrationService:
    """Migration service over configured device storage and Supabase."""
    settings = load_settings()
    db_path = get_db_path(settings.data_dir)
    if not db_path.exists():
        await init_db(db_path)

    store = LocalSnapshotStore(DeviceStorageRepository(db_path))
    return MigrationService(store, SupabaseGateway.from_settings(settings))


def create_app(service: MigrationService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        service: Migration service to use; built from settings at
            startup when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "migration_service", None) is None:
            app.state.migration_service = await build_default_service()
        yield

    app = FastAPI(
        title="liftlog",
        description="Workout tracking: local data migration API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.migration_service = service
    app.state.migration_lock = asyncio.Lock()

    app.include_router(auth.router)
    app.include_router(migration.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0"}

    return app
