"""
WebSocket Gateway：即時事件

訊息格式（JSON）：
    client -> server: {"event": "joinRoom", "roomId": "room1"}
                      {"event": "leaveRoom", "roomId": "room1"}
                      {"event": "getCoins", "roomId": "room1"}
                      {"event": "coinCollected", "roomId": "room1", "coinId": "coin_room1_0"}
    server -> client: {"event": "roomJoined", "roomId": ...}
                      {"event": "roomLeft", "roomId": ...}
                      {"event": "coins", "roomId": ..., "coins": [...]}
                      {"event": "coinCollected", "roomId": ..., "coinId": ...}（廣播給房間其他人）
                      {"event": "error", "message": ...}

房間成員只是傳輸層的分組，加入房間不檢查設定
"""
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
import json
import logging

from core.coin_manager import CoinManager
from core.connections import ConnectionManager
from core.dependencies import get_ws_coin_manager, get_ws_connections
from core.exceptions import CoinGameException

router = APIRouter(tags=["websocket"])
logger = logging.getLogger(__name__)


class MalformedMessage(ValueError):
    pass


def error_event(message: str) -> dict:
    return {"event": "error", "message": message}


async def receive_message(websocket: WebSocket) -> dict:
    """
    讀取一個 JSON object 訊息

    異常：
        WebSocketDisconnect: 客戶端斷線
        MalformedMessage: 非文字 frame、非 JSON、或不是 JSON object
    """
    raw = await websocket.receive()
    if raw["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(raw.get("code", 1000))

    text = raw.get("text")
    if text is None:
        raise MalformedMessage("Message must be a JSON text frame")

    try:
        message = json.loads(text)
    except ValueError:
        raise MalformedMessage("Invalid JSON message")

    if not isinstance(message, dict):
        raise MalformedMessage("Message must be a JSON object")
    return message


async def handle_event(
    client_id: str,
    message: dict,
    manager: CoinManager,
    connections: ConnectionManager,
) -> None:
    """
    處理單一客戶端事件

    錯誤只回給送出事件的客戶端，不影響連線與其他房間
    """
    event = message.get("event")
    room_id = message.get("roomId")

    if not isinstance(room_id, str) or not room_id:
        await connections.send(client_id, error_event("roomId is required"))
        return

    if event == "joinRoom":
        connections.join(client_id, room_id)
        logger.info(f"Client {client_id} joined room: {room_id}")
        await connections.send(client_id, {"event": "roomJoined", "roomId": room_id})

    elif event == "leaveRoom":
        connections.leave(client_id, room_id)
        logger.info(f"Client {client_id} left room: {room_id}")
        await connections.send(client_id, {"event": "roomLeft", "roomId": room_id})

    elif event == "getCoins":
        coins = await manager.list_available(room_id)
        await connections.send(client_id, {
            "event": "coins",
            "roomId": room_id,
            "coins": [coin.model_dump() for coin in coins],
        })

    elif event == "coinCollected":
        coin_id = message.get("coinId")
        if not isinstance(coin_id, str) or not coin_id:
            await connections.send(client_id, error_event("coinId is required"))
            return
        await manager.collect(room_id, coin_id)
        await connections.broadcast_to_room(
            room_id,
            {"event": "coinCollected", "roomId": room_id, "coinId": coin_id},
            exclude=client_id
        )

    else:
        await connections.send(client_id, error_event(f"Unknown event: {event}"))


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    manager: CoinManager = Depends(get_ws_coin_manager),
    connections: ConnectionManager = Depends(get_ws_connections),
):
    client_id = await connections.connect(websocket)
    try:
        while True:
            try:
                message = await receive_message(websocket)
            except MalformedMessage as e:
                await connections.send(client_id, error_event(str(e)))
                continue

            try:
                await handle_event(client_id, message, manager, connections)
            except CoinGameException as e:
                await connections.send(client_id, error_event(str(e)))
            except WebSocketDisconnect:
                raise
            except Exception as e:
                logger.error(f"Failed to handle event {message.get('event')}: {e}", exc_info=True)
                await connections.send(client_id, error_event("Internal error"))

    except WebSocketDisconnect:
        pass
    finally:
        connections.disconnect(client_id)
