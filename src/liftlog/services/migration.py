"""One-time migration of on-device data to the hosted backend."""

import logging

from ..clients.base import RemoteGateway
from ..db.snapshot_store import LocalSnapshotStore
from ..errors import AuthenticationError, NoDataError, RecordTransferError
from ..models.migration import (
    LocalSnapshot,
    MigrationMarker,
    MigrationResult,
    MigrationState,
    describe_raw_entry,
)
from ..utils.exercise_utils import require_exercise_name

logger = logging.getLogger(__name__)


class MigrationEngine:
    """Transfers the local snapshot to the remote store.

    Records are sent one at a time, in stored order: exercise library
    first, then workouts, then body weights. A record that fails is
    reported in the result and skipped, as is a stored entry that could
    not be parsed. Only a missing session or a missing snapshot aborts
    the run.

    The engine never writes the migration marker or clears the
    snapshot; callers decide that from the result.

    Re-running is safe for the library and body weights (both
    idempotent remotely) but inserts workouts again.
    """

    def __init__(self, store: LocalSnapshotStore, gateway: RemoteGateway):
        self.store = store
        self.gateway = gateway

    async def run_migration(self) -> MigrationResult:
        """Run one migration attempt.

        Returns:
            The aggregated result. `success` is True once every phase
            was attempted; per-record failures are listed in `errors`.
            Nothing raised by the gateway escapes.
        """
        try:
            account_id = await self.gateway.get_current_account_id()
        except Exception as e:
            logger.exception("Could not look up the signed-in account")
            return MigrationResult.failed(f"User must be authenticated to migrate data: {e}")
        if account_id is None:
            e = AuthenticationError("User must be authenticated to migrate data")
            logger.error("Migration aborted: %s", e)
            return MigrationResult.failed(str(e))

        snapshot = await self.store.read_snapshot()
        if snapshot is None:
            e = NoDataError("No local data found to migrate")
            logger.info("Migration aborted: %s", e)
            return MigrationResult.failed(str(e))

        counts = snapshot.counts()
        logger.info(
            "Starting migration for account %s: %d workouts, %d body weights, %d exercises",
            account_id,
            counts["workouts"],
            counts["body_weights"],
            counts["exercises"],
        )

        result = MigrationResult()
        await self._migrate_exercises(snapshot, result)
        await self._migrate_workouts(snapshot, result)
        await self._migrate_body_weights(snapshot, result)

        result.success = True
        logger.info(
            "Migration finished: %d exercises, %d workouts, %d body weights, %d errors",
            result.exercises_migrated,
            result.workouts_migrated,
            result.body_weights_migrated,
            len(result.errors),
        )
        return result

    def _record_failure(
        self, result: MigrationResult, kind: str, description: str, cause: object
    ) -> None:
        error = RecordTransferError(kind, description)
        logger.error("%s (%s)", error, cause)
        result.errors.append(str(error))

    async def _migrate_exercises(self, snapshot: LocalSnapshot, result: MigrationResult) -> None:
        # Names that collapse to the same canonical form are sent once
        sent: set[str] = set()
        for raw_name in snapshot.exercise_library:
            try:
                name = require_exercise_name(raw_name)
                if name in sent:
                    continue
                sent.add(name)
                await self.gateway.ensure_exercise_in_library(name)
            except Exception as e:
                self._record_failure(result, "exercise", raw_name, e)
                continue
            result.exercises_migrated += 1

    async def _migrate_workouts(self, snapshot: LocalSnapshot, result: MigrationResult) -> None:
        for entry in snapshot.unreadable_workouts:
            self._record_failure(result, "workout", describe_raw_entry(entry), "unreadable entry")

        for workout in snapshot.workouts:
            try:
                workout.validate()
                name = require_exercise_name(workout.exercise_name)
                await self.gateway.create_workout(
                    name, workout.reps, workout.weight, workout.date
                )
            except Exception as e:
                self._record_failure(result, "workout", workout.describe(), e)
                continue
            result.workouts_migrated += 1

    async def _migrate_body_weights(
        self, snapshot: LocalSnapshot, result: MigrationResult
    ) -> None:
        for entry in snapshot.unreadable_body_weights:
            self._record_failure(
                result, "body weight", describe_raw_entry(entry), "unreadable entry"
            )

        for entry in snapshot.body_weights:
            try:
                entry.validate()
                await self.gateway.upsert_body_weight(entry.weight, entry.date)
            except Exception as e:
                self._record_failure(result, "body weight", entry.describe(), e)
                continue
            result.body_weights_migrated += 1


class MigrationService:
    """What a presentation layer uses to drive the migration.

    Callers must not start a second `run_migration` while one is in
    flight; nothing here guards against it. The web app serializes runs
    with a lock.

    Without a gateway only the local operations (status, preview, skip,
    reset) are available; `run_migration` reports the missing session.
    """

    def __init__(self, store: LocalSnapshotStore, gateway: RemoteGateway | None = None):
        self.store = store
        self.gateway = gateway
        self.engine = MigrationEngine(store, gateway) if gateway is not None else None
        self.state = MigrationState.NOT_CHECKED

    async def is_migration_needed(self) -> bool:
        needed = await self.store.is_migration_needed()
        if needed:
            self.state = MigrationState.NEEDS_MIGRATION
        else:
            marker = await self.store.read_marker()
            if marker is not None:
                self.state = marker.state
        return needed

    async def preview_local_data(self) -> LocalSnapshot | None:
        return await self.store.read_snapshot()

    async def run_migration(self) -> MigrationResult:
        if self.engine is None:
            return MigrationResult.failed("User must be authenticated to migrate data")

        previous = self.state
        self.state = MigrationState.MIGRATING
        try:
            return await self.engine.run_migration()
        finally:
            self.state = previous

    async def mark_skipped(self) -> None:
        """Record that the user declined to migrate."""
        await self.store.write_marker(MigrationMarker.for_skip())
        self.state = MigrationState.SKIPPED

    async def clear_snapshot_after_success(self) -> None:
        await self.store.clear_snapshot()

    async def complete_if_clean(
        self, result: MigrationResult, account_id: str | None = None
    ) -> bool:
        """Write the completion marker and clear the snapshot.

        Only done when the run succeeded with no errors; a partial run
        leaves both untouched so the user can retry or skip.

        Returns:
            True if the migration was marked complete
        """
        if not result.is_clean:
            return False

        if account_id is None and self.gateway is not None:
            account_id = await self.gateway.get_current_account_id()
        await self.store.write_marker(MigrationMarker.for_migration(account_id))
        await self.store.clear_snapshot()
        self.state = MigrationState.COMPLETED
        return True

    async def perform_auto_migration_if_needed(self) -> MigrationResult | None:
        """Migrate without prompting when there is something to migrate.

        Returns:
            The result, or None when no migration was needed
        """
        if not await self.is_migration_needed():
            return None

        logger.info("Auto-migration needed, starting")
        result = await self.run_migration()
        await self.complete_if_clean(result)
        return result

    async def get_migration_status(self) -> MigrationMarker | None:
        return await self.store.read_marker()

    async def reset_migration_flag(self) -> None:
        await self.store.reset_marker()
        self.state = MigrationState.NOT_CHECKED
