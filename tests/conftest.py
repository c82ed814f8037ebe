"""Shared fixtures for the coin game backend tests."""

import random
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from database import Base, Settings, build_engine, build_session_factory
from main import create_app
from schemas import Area, RoomConfig
from core.coin_manager import CoinManager
from core.room_registry import RoomRegistry
from core.room_store import RoomStateStore


def make_room(room_id: str = "room1", coin_count: int = 3, low: int = 0, high: int = 5) -> RoomConfig:
    return RoomConfig(
        id=room_id,
        coin_count=coin_count,
        area=Area(xmin=low, xmax=high, ymin=low, ymax=high, zmin=low, zmax=high),
    )


@pytest.fixture()
def room_config() -> RoomConfig:
    return make_room()


@pytest.fixture()
def registry(room_config: RoomConfig) -> RoomRegistry:
    return RoomRegistry([room_config, make_room("room2", coin_count=2)])


@pytest.fixture()
def session_factory(tmp_path: Path):
    engine = build_engine(f"sqlite:///{tmp_path / 'coins.db'}")
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def broken_session_factory(tmp_path: Path):
    """A database without the room_states table, so every query fails."""

    engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def store(session_factory) -> RoomStateStore:
    return RoomStateStore(session_factory)


@pytest.fixture()
def make_manager(registry: RoomRegistry, store: RoomStateStore):
    def factory(expire_seconds: float = 3600.0, store_override: RoomStateStore = None) -> CoinManager:
        return CoinManager(
            registry=registry,
            store=store_override or store,
            expire_seconds=expire_seconds,
            rng=random.Random(42),
        )

    return factory


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'api.db'}",
        coin_expire_seconds=3600.0,
        rooms=[make_room()],
    )


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
