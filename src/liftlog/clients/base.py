"""Base protocol for the hosted data backend."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Protocol, runtime_checkable

from ..errors import AuthenticationError
from ..models.records import BodyWeightRecord, WorkoutRecord


@runtime_checkable
class RemoteGateway(Protocol):
    """Record operations the migration needs from the hosted backend."""

    async def get_current_account_id(self) -> str | None:
        """Return the signed-in account id, or None without a session."""
        ...

    async def ensure_exercise_in_library(self, name: str) -> None:
        """Add an exercise to the account library if it is not there yet.

        Idempotent: creates the global exercise and the library link
        only when absent.
        """
        ...

    async def create_workout(
        self, exercise_name: str, reps: int, weight: float, workout_date: date
    ) -> WorkoutRecord:
        """Insert a workout set. Not idempotent."""
        ...

    async def upsert_body_weight(self, weight: float, entry_date: date) -> BodyWeightRecord:
        """Insert or replace the body weight for a date."""
        ...


class BaseRemoteGateway(ABC):
    """Base class for gateways with common functionality."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this backend."""
        pass

    @abstractmethod
    async def get_current_account_id(self) -> str | None:
        pass

    @abstractmethod
    async def ensure_exercise_in_library(self, name: str) -> None:
        pass

    @abstractmethod
    async def create_workout(
        self, exercise_name: str, reps: int, weight: float, workout_date: date
    ) -> WorkoutRecord:
        pass

    @abstractmethod
    async def upsert_body_weight(self, weight: float, entry_date: date) -> BodyWeightRecord:
        pass

    async def require_account_id(self, action: str) -> str:
        """Return the current account id or fail.

        Args:
            action: What the caller is trying to do, for the error message

        Raises:
            AuthenticationError: If no account is signed in
        """
        account_id = await self.get_current_account_id()
        if account_id is None:
            raise AuthenticationError(f"User must be authenticated to {action}")
        return account_id
