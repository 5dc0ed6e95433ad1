"""Room management through the LiveKit server API.

A fresh client is opened per request (``async with RoomDirectory(cfg) as rooms``) so the
underlying aiohttp session never outlives the handler that needed it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from livekit import api

from huddle_core.config import LiveKitConfig
from huddle_core.errors import InternalConfig

logger = logging.getLogger(__name__)

_NOT_FOUND_MARKERS = ("does not exist", "not found")


@dataclass(frozen=True)
class RoomSummary:
    name: str
    num_participants: int
    creation_time: int | None = None
    metadata: str | None = None


def summarize_room(room: Any) -> RoomSummary:
    """Project a protobuf Room onto plain Python values.

    Counters and timestamps arrive as wide protobuf integers; a zero creation time means
    "unset" and is passed through as None rather than converted.
    """

    creation_time = int(getattr(room, "creation_time", 0) or 0)
    metadata = getattr(room, "metadata", "") or None
    return RoomSummary(
        name=room.name,
        num_participants=int(getattr(room, "num_participants", 0) or 0),
        creation_time=creation_time or None,
        metadata=metadata,
    )


def is_room_not_found(exc: BaseException) -> bool:
    """Decide whether a delete failure means the room is already gone.

    Structured signals (HTTP status, Twirp error code) are checked first; the message text is
    inspected whenever they do not already say the room is gone.
    """

    status = getattr(exc, "status", None)
    if status == 404:
        return True

    code = getattr(exc, "code", None)
    code = getattr(code, "value", code)
    if code == "not_found":
        return True

    message = (getattr(exc, "message", None) or str(exc)).lower()
    return any(marker in message for marker in _NOT_FOUND_MARKERS)


class RoomDirectory:
    """Async context manager around ``livekit.api.LiveKitAPI`` room calls."""

    def __init__(self, config: LiveKitConfig) -> None:
        self._config = config
        self._client: api.LiveKitAPI | None = None

    async def __aenter__(self) -> RoomDirectory:
        cfg = self._config
        if not cfg.is_complete:
            raise InternalConfig("LiveKit configuration missing")

        logger.debug(
            "LiveKit config: api_key=%s api_secret=%s url=%s",
            "***",
            "***",
            cfg.url,
        )
        self._client = api.LiveKitAPI(
            url=cfg.http_url,
            api_key=cfg.api_key,
            api_secret=cfg.api_secret,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        client = self._client
        self._client = None
        if client is not None:
            await client.aclose()

    def _require_client(self) -> api.LiveKitAPI:
        if self._client is None:
            raise RuntimeError("RoomDirectory used outside of 'async with'")
        return self._client

    async def list_rooms(self) -> list[RoomSummary]:
        response = await self._require_client().room.list_rooms(api.ListRoomsRequest())
        rooms = [summarize_room(r) for r in response.rooms]
        logger.info(
            f"Found {len(rooms)} active rooms: "
            + ", ".join(f"{r.name} ({r.num_participants})" for r in rooms)
        )
        return rooms

    async def delete_room(self, name: str) -> bool:
        """Delete `name`; returns False when the room was already gone."""

        try:
            await self._require_client().room.delete_room(api.DeleteRoomRequest(room=name))
        except Exception as exc:
            if is_room_not_found(exc):
                logger.info(f"Room {name} not found or already deleted")
                return False
            raise
        logger.info(f"Room {name} successfully deleted")
        return True
