from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from huddle_core.rooms import RoomSummary

NO_STORE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorBody(BaseModel):
    error: str
    details: Any | None = None
    timestamp: str | None = None


def fail(*, error: str, details: Any | None = None, timestamp: str | None = None) -> dict:
    return ErrorBody(error=error, details=details, timestamp=timestamp).model_dump(
        mode="json", exclude_none=True
    )


class AuthRequest(BaseModel):
    # Any JSON value; non-strings simply never match the configured password.
    password: Any = None


class AuthResult(BaseModel):
    success: bool
    message: str


class TokenResponse(BaseModel):
    token: str


class RoomInfo(_CamelModel):
    name: str
    num_participants: int
    creation_time: int | None = Field(
        default=None, description="Seconds since the Unix epoch; omitted when unknown."
    )
    metadata: str | None = None

    @classmethod
    def from_summary(cls, summary: RoomSummary) -> RoomInfo:
        return cls(
            name=summary.name,
            num_participants=summary.num_participants,
            creation_time=summary.creation_time,
            metadata=summary.metadata,
        )


class RoomList(BaseModel):
    rooms: list[RoomInfo]


class RoomDeleted(_CamelModel):
    message: str
    room: str
    # The direct delete call does not report a count; always null.
    participants_disconnected: int | None = None


class RoomAlreadyGone(BaseModel):
    message: str
    room: str
