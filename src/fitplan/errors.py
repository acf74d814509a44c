"""Error types raised by the plan engine and its collaborators."""

from typing import Any

DOMAIN_EMPTY_MESSAGE = (
    "No suitable exercises available. Expand the exercise catalog or contact support."
)
MISSING_PROFILE_FIELDS = "Missing required profile fields (age and fitness goal)"


class WorkoutError(Exception):
    """Base class for errors surfaced to users."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(WorkoutError, ValueError):
    """Malformed or out-of-domain input."""


class DomainEmptyError(WorkoutError):
    """The exercise catalog yields no usable candidates."""

    def __init__(self, message: str = DOMAIN_EMPTY_MESSAGE, details: dict[str, Any] | None = None):
        super().__init__(message, details)


class PersistenceError(WorkoutError):
    """A storage operation failed or referenced a missing row."""


def error_message(error: BaseException, default: str) -> str:
    """Get the user-facing text for an exception."""
    if isinstance(error, WorkoutError):
        return error.message
    if str(error):
        return str(error)
    return default
