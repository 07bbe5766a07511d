"""Services for liftlog."""

from .migration import MigrationEngine, MigrationService

__all__ = ["MigrationEngine", "MigrationService"]
