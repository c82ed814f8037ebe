import asyncio

import pytest

from models import RoomState
from schemas import Coin, CoinSet, Position
from core.exceptions import StoreUnavailable
from core.room_store import RoomStateStore


def _coin_set(epoch: int = 1) -> CoinSet:
    return CoinSet(
        epoch=epoch,
        coins=[
            Coin(id="coin_room1_0", position=Position(x=1, y=2, z=3)),
            Coin(id="coin_room1_1", position=Position(x=0, y=5, z=4)),
        ],
    )


def test_save_then_load_returns_equal_set(store: RoomStateStore) -> None:
    async def scenario():
        await store.save("room1", _coin_set())
        return await store.load("room1")

    assert asyncio.run(scenario()) == _coin_set()


def test_load_missing_room_returns_none(store: RoomStateStore) -> None:
    assert asyncio.run(store.load("room1")) is None


def test_save_overwrites_existing_value(store: RoomStateStore) -> None:
    replacement = CoinSet(epoch=2, coins=[])

    async def scenario():
        await store.save("room1", _coin_set())
        await store.save("room1", replacement)
        return await store.load("room1")

    assert asyncio.run(scenario()) == replacement


def test_clear_removes_key_and_tolerates_missing(store: RoomStateStore) -> None:
    async def scenario():
        await store.save("room1", _coin_set())
        first = await store.clear("room1")
        second = await store.clear("room1")
        return first, second, await store.load("room1")

    assert asyncio.run(scenario()) == (True, False, None)


def test_rooms_are_stored_under_separate_keys(store: RoomStateStore) -> None:
    async def scenario():
        await store.save("room1", _coin_set())
        await store.save("room2", CoinSet(epoch=7, coins=[]))
        await store.clear("room2")
        return await store.load("room1"), await store.load("room2")

    assert asyncio.run(scenario()) == (_coin_set(), None)


def test_backend_failure_raises_store_unavailable(broken_session_factory) -> None:
    store = RoomStateStore(broken_session_factory)

    with pytest.raises(StoreUnavailable):
        asyncio.run(store.load("room1"))

    with pytest.raises(StoreUnavailable):
        asyncio.run(store.save("room1", _coin_set()))

    with pytest.raises(StoreUnavailable):
        asyncio.run(store.clear("room1"))


def test_corrupt_payload_raises_store_unavailable(store: RoomStateStore, session_factory) -> None:
    db = session_factory()
    try:
        db.add(RoomState(room_id="room1", payload="{not a coin set"))
        db.commit()
    finally:
        db.close()

    with pytest.raises(StoreUnavailable) as exc_info:
        asyncio.run(store.load("room1"))

    assert "Corrupt room state for room room1" in str(exc_info.value)
