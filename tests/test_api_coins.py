from fastapi.testclient import TestClient

from core.exceptions import StoreUnavailable


class FailingStore:
    async def load(self, room_id):
        raise StoreUnavailable("Room state store failed: connection refused")


def test_root_and_health(client: TestClient) -> None:
    assert client.get("/").json() == {"message": "Coin Game API", "status": "ok"}
    assert client.get("/health").json() == {"status": "healthy"}


def test_get_coins_returns_generated_coins(client: TestClient) -> None:
    response = client.get("/api/rooms/room1/coins")

    assert response.status_code == 200
    coins = response.json()
    assert [coin["id"] for coin in coins] == ["coin_room1_0", "coin_room1_1", "coin_room1_2"]
    for coin in coins:
        assert set(coin["position"]) == {"x", "y", "z"}
        assert all(0 <= value <= 5 for value in coin["position"].values())


def test_get_coins_for_unknown_room_is_empty(client: TestClient) -> None:
    response = client.get("/api/rooms/unknownRoom/coins")

    assert response.status_code == 200
    assert response.json() == []


def test_get_coins_reflects_collection(client: TestClient) -> None:
    manager = client.app.state.coin_manager
    client.portal.call(manager.collect, "room1", "coin_room1_1")

    ids = [coin["id"] for coin in client.get("/api/rooms/room1/coins").json()]

    assert ids == ["coin_room1_0", "coin_room1_2"]


def test_get_coins_store_failure_returns_500(client: TestClient) -> None:
    client.app.state.coin_manager.store = FailingStore()

    response = client.get("/api/rooms/room1/coins")

    assert response.status_code == 500
    assert response.json() == {"error": "Room state store failed: connection refused"}


def test_list_rooms_returns_configuration(client: TestClient) -> None:
    response = client.get("/api/rooms")

    assert response.status_code == 200
    rooms = response.json()
    assert len(rooms) == 1
    assert rooms[0]["id"] == "room1"
    assert rooms[0]["coin_count"] == 3
    assert rooms[0]["area"]["xmax"] == 5
