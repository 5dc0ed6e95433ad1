from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from huddle_core.api.deps import get_config, get_room_directory
from huddle_core.api.models import (
    NO_STORE_HEADERS,
    RoomAlreadyGone,
    RoomDeleted,
    RoomInfo,
    RoomList,
    TokenResponse,
)
from huddle_core.config import CoreConfig
from huddle_core.errors import (
    BadRequest,
    HuddleError,
    InternalConfig,
    InternalError,
    describe_exception,
    utc_timestamp,
)
from huddle_core.grants import mint_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/token", tags=["token"])


def _no_store_json(content: Any) -> JSONResponse:
    return JSONResponse(status_code=200, content=content, headers=NO_STORE_HEADERS)


@router.get("", response_model=TokenResponse)
async def issue_token(
    room: str | None = None,
    username: str | None = None,
    config: CoreConfig = Depends(get_config),  # noqa: B008
) -> JSONResponse:
    if not room:
        raise BadRequest('Missing "room" query parameter')
    if not username:
        raise BadRequest('Missing "username" query parameter')

    if not config.livekit.is_complete:
        raise InternalConfig("Server misconfigured")

    try:
        token = mint_access_token(config.livekit, room=room, identity=username)
    except HuddleError:
        raise
    except Exception as e:
        logger.exception("Error generating token")
        raise InternalError("Failed to generate token") from e

    return _no_store_json(TokenResponse(token=token).model_dump())


@router.post("", response_model=RoomList)
async def list_rooms(directory: Any = Depends(get_room_directory)) -> JSONResponse:  # noqa: B008
    logger.info("Attempting to list rooms...")
    try:
        async with directory as rooms:
            summaries = await rooms.list_rooms()
    except Exception as e:
        logger.exception("Error listing rooms")
        raise InternalError(
            "Failed to list rooms",
            details=describe_exception(e),
            timestamp=utc_timestamp(),
        ) from e

    payload = RoomList(rooms=[RoomInfo.from_summary(s) for s in summaries])
    return _no_store_json(payload.model_dump(mode="json", by_alias=True, exclude_none=True))


@router.delete("", response_model=RoomDeleted | RoomAlreadyGone)
async def delete_room(
    room: str | None = None,
    username: str | None = None,
    directory: Any = Depends(get_room_directory),  # noqa: B008
) -> JSONResponse:
    if not room:
        raise BadRequest('Missing "room" query parameter')

    logger.info(f"Room deletion requested for room: {room}, user: {username}")

    try:
        async with directory as rooms:
            deleted = await rooms.delete_room(room)
    except Exception as e:
        logger.exception("Error during room deletion")
        raise InternalError("Failed to delete room", details=describe_exception(e)) from e

    if not deleted:
        body = RoomAlreadyGone(message="Room not found or already deleted", room=room)
        return _no_store_json(body.model_dump())

    body = RoomDeleted(message="Room deleted successfully", room=room)
    return _no_store_json(body.model_dump(mode="json", by_alias=True))
