"""Shared dependencies for the liftlog API."""

import asyncio

from fastapi import Request

from ..services.migration import MigrationService


def get_migration_service(request: Request) -> MigrationService:
    """Get the migration service from app state."""
    return request.app.state.migration_service


def get_migration_lock(request: Request) -> asyncio.Lock:
    """Lock held while a migration runs, one per app."""
    return request.app.state.migration_lock
