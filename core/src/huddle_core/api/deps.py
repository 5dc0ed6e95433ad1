from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from huddle_core.config import CoreConfig
from huddle_core.errors import InternalConfig
from huddle_core.rooms import RoomDirectory


def get_config(request: Request) -> CoreConfig:
    config = getattr(request.app.state, "huddle_config", None)
    if config is None:
        raise InternalConfig("Server configuration not initialized")
    return config


def get_room_directory_factory(request: Request) -> Callable[..., Any]:
    return getattr(request.app.state, "room_directory_factory", None) or RoomDirectory


def get_room_directory(
    config: CoreConfig = Depends(get_config),  # noqa: B008
    factory: Callable[..., Any] = Depends(get_room_directory_factory),  # noqa: B008
) -> Any:
    """Unopened room directory; callers enter it with ``async with``."""

    return factory(config.livekit)
