"""Error taxonomy shared by the HTTP handlers.

Every handler raises one of these at its boundary; ``app.create_app`` renders them as
``{"error": ..., "details"?: ..., "timestamp"?: ...}`` JSON bodies.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class HuddleError(Exception):
    """Base error carrying an HTTP status and an optional diagnostic payload."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        details: Any | None = None,
        timestamp: str | None = None,
    ) -> None:
        self.message = message
        self.details = details
        self.timestamp = timestamp
        super().__init__(message)


class BadRequest(HuddleError):
    """A required input is missing."""

    status_code = 400


class Unauthorized(HuddleError):
    """Submitted credential does not match."""

    status_code = 401


class InternalConfig(HuddleError):
    """Server configuration is incomplete (deployment error, not a caller error)."""

    status_code = 500


class InternalError(HuddleError):
    """Upstream or unexpected failure."""

    status_code = 500


def describe_exception(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or type(exc).__name__
