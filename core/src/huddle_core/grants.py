from __future__ import annotations

import logging

from livekit import api

from huddle_core.config import LiveKitConfig
from huddle_core.errors import InternalConfig

logger = logging.getLogger(__name__)


def build_video_grants(room: str) -> api.VideoGrants:
    # Always the full triple, scoped to exactly one room.
    return api.VideoGrants(
        room=room,
        room_join=True,
        can_publish=True,
        can_subscribe=True,
    )


def mint_access_token(config: LiveKitConfig, *, room: str, identity: str) -> str:
    """Sign a participant JWT for `room`.

    The TTL is left at the SDK default; tokens are never tracked or revoked here.
    """

    if not config.is_complete:
        raise InternalConfig("Server misconfigured")

    token = (
        api.AccessToken(config.api_key, config.api_secret)
        .with_identity(identity)
        .with_grants(build_video_grants(room))
        .to_jwt()
    )
    logger.info(f"Token generated for room: {room}, user: {identity}")
    return token
