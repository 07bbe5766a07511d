"""Migration routes."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from ...models.migration import MigrationState
from ...services.migration import MigrationService
from ..deps import get_migration_lock, get_migration_service

router = APIRouter(prefix="/migration", tags=["migration"])


@router.get("/status")
async def migration_status(service: MigrationService = Depends(get_migration_service)):
    """Whether migration is needed, and the marker if one was written."""
    needed = await service.is_migration_needed()
    marker = await service.get_migration_status()

    return {
        "needed": needed,
        "state": service.state.value,
        "marker": marker.to_dict() if marker else None,
    }


@router.get("/preview")
async def migration_preview(service: MigrationService = Depends(get_migration_service)):
    """Counts and normalized exercise names of the local snapshot."""
    snapshot = await service.preview_local_data()
    if snapshot is None:
        return {"available": False}

    return {
        "available": True,
        "counts": snapshot.counts(),
        "exercises": snapshot.canonical_exercise_names(),
    }


@router.post("/run")
async def run_migration(
    service: MigrationService = Depends(get_migration_service),
    lock: asyncio.Lock = Depends(get_migration_lock),
):
    """Run the migration and mark it complete if nothing failed.

    Returns 409 while another run is in progress; a second run would
    insert every workout again.
    """
    if lock.locked() or service.state is MigrationState.MIGRATING:
        raise HTTPException(status_code=409, detail="Migration already in progress")

    async with lock:
        if not await service.is_migration_needed():
            return {"status": "not_needed"}

        result = await service.run_migration()
        completed = await service.complete_if_clean(result)

    if completed:
        status = "completed"
    elif result.success:
        status = "partial"
    else:
        status = "failed"

    return {
        "status": status,
        "result": result.to_dict(),
        "errorPreview": result.error_preview(),
    }


@router.post("/skip")
async def skip_migration(service: MigrationService = Depends(get_migration_service)):
    """Stop offering migration on this device."""
    if not await service.is_migration_needed():
        return {"status": "not_needed"}

    await service.mark_skipped()
    return {"status": "skipped"}
