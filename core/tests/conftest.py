from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from huddle_core.app import create_app
from huddle_core.auth import SESSION_COOKIE, SESSION_VALUE
from huddle_core.config import CoreConfig, LiveKitConfig
from huddle_core.rooms import RoomSummary

API_KEY = "devkey"
API_SECRET = "devsecret-devsecret-devsecret-0123456789"


class FakeRoomDirectory:
    """In-memory stand-in for RoomDirectory; shares state through the class attributes."""

    rooms: dict[str, RoomSummary] = {}
    list_error: Exception | None = None
    delete_error: Exception | None = None

    def __init__(self, config: LiveKitConfig) -> None:
        self.config = config

    async def __aenter__(self) -> FakeRoomDirectory:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def list_rooms(self) -> list[RoomSummary]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.rooms.values())

    async def delete_room(self, name: str) -> bool:
        if self.delete_error is not None:
            raise self.delete_error
        return self.rooms.pop(name, None) is not None


@pytest.fixture
def fake_rooms() -> Iterator[type[FakeRoomDirectory]]:
    FakeRoomDirectory.rooms = {}
    FakeRoomDirectory.list_error = None
    FakeRoomDirectory.delete_error = None
    yield FakeRoomDirectory


@pytest.fixture
def config() -> CoreConfig:
    return CoreConfig.model_validate(
        {
            "auth": {"app_password": "secret"},
            "livekit": {
                "api_key": API_KEY,
                "api_secret": API_SECRET,
                "url": "wss://example.livekit.cloud",
            },
        }
    )


@pytest.fixture
def client(config: CoreConfig, fake_rooms) -> Iterator[TestClient]:
    with TestClient(create_app(config, room_directory_factory=fake_rooms)) as c:
        yield c


@pytest.fixture
def authed_client(client: TestClient) -> TestClient:
    client.cookies.set(SESSION_COOKIE, SESSION_VALUE)
    return client
