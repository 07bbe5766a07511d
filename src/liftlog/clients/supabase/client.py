"""Supabase-backed gateway for workouts, body weights and the exercise library."""

import asyncio
import logging
from datetime import date
from typing import Any

import httpx
from supabase import AuthError, Client, PostgrestAPIError, create_client

from ...config import Settings
from ...errors import AuthenticationError, GatewayError, ValidationError
from ...models.records import BodyWeightRecord, ExerciseLibraryEntry, WorkoutRecord
from ...utils.exercise_utils import require_exercise_name
from ..base import BaseRemoteGateway

logger = logging.getLogger(__name__)

WORKOUTS_TABLE = "workouts"
BODY_WEIGHTS_TABLE = "body_weights"
EXERCISES_TABLE = "exercises"
USER_EXERCISES_TABLE = "user_exercises"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so ilike matches the literal value."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SupabaseGateway(BaseRemoteGateway):
    """Gateway over the supabase-py client.

    Row-level security scopes every table to the signed-in account; the
    explicit user_id filters mirror those policies. The client is
    blocking, so each request runs in a worker thread.
    """

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseGateway":
        """Create a gateway from validated settings.

        Raises:
            ConfigurationError: If the Supabase URL or key is missing/invalid
        """
        settings.require_valid()
        return cls(create_client(settings.supabase_url, settings.supabase_key))

    @property
    def source_name(self) -> str:
        return "supabase"

    async def _execute(self, query: Any, action: str) -> list[dict]:
        """Run a query builder and return its rows."""
        try:
            response = await asyncio.to_thread(query.execute)
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.error("Error trying to %s: %s", action, e)
            raise GatewayError(f"Failed to {action}: {e}") from e
        return response.data or []

    # ---------- auth ----------
    async def sign_in(self, email: str, password: str) -> str:
        """Sign in with email and password and return the account id."""
        try:
            response = await asyncio.to_thread(
                self.client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except AuthError as e:
            raise AuthenticationError(f"Sign-in failed: {e}") from e

        if response.user is None:
            raise AuthenticationError("Sign-in failed: no user returned")
        return response.user.id

    async def sign_out(self) -> None:
        await asyncio.to_thread(self.client.auth.sign_out)

    async def get_current_account_id(self) -> str | None:
        try:
            response = await asyncio.to_thread(self.client.auth.get_user)
        except AuthError as e:
            logger.debug("No active session: %s", e)
            return None
        if response is None or response.user is None:
            return None
        return response.user.id

    # ---------- exercise library ----------
    async def ensure_exercise_in_library(self, name: str) -> None:
        account_id = await self.require_account_id("add exercises to library")
        normalized = require_exercise_name(name)

        rows = await self._execute(
            self.client.table(EXERCISES_TABLE)
            .select("id")
            .ilike("name", _escape_like(normalized))
            .limit(1),
            "search for exercise",
        )

        if rows:
            exercise_id = rows[0]["id"]
        else:
            created = await self._execute(
                self.client.table(EXERCISES_TABLE).insert(
                    {"name": normalized, "category": None}
                ),
                "create exercise",
            )
            exercise_id = created[0]["id"]

        # Existing links (and their favorite/custom name) are left untouched
        await self._execute(
            self.client.table(USER_EXERCISES_TABLE).upsert(
                {
                    "user_id": account_id,
                    "exercise_id": exercise_id,
                    "custom_name": None,
                    "is_favorite": False,
                },
                on_conflict="user_id,exercise_id",
                ignore_duplicates=True,
            ),
            "add exercise to library",
        )

    async def get_exercise_library(self) -> list[ExerciseLibraryEntry]:
        """Get the account's exercise library, newest first."""
        account_id = await self.get_current_account_id()
        if account_id is None:
            return []

        rows = await self._execute(
            self.client.table(USER_EXERCISES_TABLE)
            .select("*, exercise:exercises(*)")
            .eq("user_id", account_id)
            .order("created_at", desc=True),
            "fetch exercise library",
        )
        return [ExerciseLibraryEntry.from_row(row) for row in rows]

    async def remove_exercise_from_library(self, name: str) -> bool:
        """Remove an exercise from the account library by display name.

        Returns:
            False if the name is not in the library, True once removed

        Raises:
            ValidationError: If any workout still uses the exercise
        """
        account_id = await self.require_account_id("remove exercises from library")

        library = await self.get_exercise_library()
        entry = next((e for e in library if e.display_name == name), None)
        if entry is None:
            return False

        workouts = await self._execute(
            self.client.table(WORKOUTS_TABLE)
            .select("id, exercise_name")
            .eq("user_id", account_id),
            "check workout usage",
        )
        if any(w["exercise_name"].lower() == entry.name.lower() for w in workouts):
            raise ValidationError("Cannot remove exercise that is used in workout entries")

        await self._execute(
            self.client.table(USER_EXERCISES_TABLE)
            .delete()
            .eq("user_id", account_id)
            .eq("exercise_id", entry.exercise_id),
            "remove exercise from library",
        )
        return True

    # ---------- workouts ----------
    async def create_workout(
        self, exercise_name: str, reps: int, weight: float, workout_date: date
    ) -> WorkoutRecord:
        account_id = await self.require_account_id("add workout entries")
        record = WorkoutRecord(
            exercise_name=exercise_name, reps=reps, weight=weight, date=workout_date
        )

        rows = await self._execute(
            self.client.table(WORKOUTS_TABLE).insert(record.to_row(account_id)),
            "save workout",
        )
        return WorkoutRecord.from_row(rows[0])

    async def list_workouts(self, limit: int | None = None) -> list[WorkoutRecord]:
        """Get the account's workouts, most recent date first."""
        account_id = await self.get_current_account_id()
        if account_id is None:
            return []

        query = (
            self.client.table(WORKOUTS_TABLE)
            .select("*")
            .eq("user_id", account_id)
            .order("date", desc=True)
        )
        if limit:
            query = query.limit(limit)

        rows = await self._execute(query, "fetch workouts")
        return [WorkoutRecord.from_row(row) for row in rows]

    # ---------- body weights ----------
    async def upsert_body_weight(self, weight: float, entry_date: date) -> BodyWeightRecord:
        account_id = await self.require_account_id("add body weight entries")
        record = BodyWeightRecord(weight=weight, date=entry_date)

        rows = await self._execute(
            self.client.table(BODY_WEIGHTS_TABLE).upsert(
                record.to_row(account_id), on_conflict="user_id,date"
            ),
            "save body weight",
        )
        return BodyWeightRecord.from_row(rows[0])

    async def list_body_weights(self, limit: int | None = None) -> list[BodyWeightRecord]:
        """Get the account's body weights, most recent date first."""
        account_id = await self.get_current_account_id()
        if account_id is None:
            return []

        query = (
            self.client.table(BODY_WEIGHTS_TABLE)
            .select("*")
            .eq("user_id", account_id)
            .order("date", desc=True)
        )
        if limit:
            query = query.limit(limit)

        rows = await self._execute(query, "fetch body weights")
        return [BodyWeightRecord.from_row(row) for row in rows]
