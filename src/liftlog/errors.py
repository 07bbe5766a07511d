"""Exception types for liftlog."""


class LiftlogError(Exception):
    """Base class for liftlog errors."""


class ValidationError(LiftlogError, ValueError):
    """A value failed validation (blank exercise name, out-of-range reps...)."""


class ConfigurationError(LiftlogError):
    """Settings are missing or malformed."""


class AuthenticationError(LiftlogError):
    """No authenticated account session is available."""


class NoDataError(LiftlogError):
    """There is no local snapshot to migrate."""


class GatewayError(LiftlogError):
    """A call to the hosted backend failed."""


class RecordTransferError(LiftlogError):
    """A single record could not be transferred to the remote store.

    Non-fatal during migration: the message is collected into the
    result's error list and the batch continues.
    """

    def __init__(self, record_kind: str, description: str):
        self.record_kind = record_kind
        self.description = description
        super().__init__(f"Failed to migrate {record_kind}: {description}")
