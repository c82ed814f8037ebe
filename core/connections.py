"""
Connection Manager：WebSocket 連線與房間分組

每個 app 在 lifespan 中建立自己的實例並掛在 app.state 上，
不同 app 之間不會共用房間成員
"""
from fastapi import WebSocket
from typing import Dict, Optional, Set
import logging
import uuid

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    管理 WebSocket 連線與房間分組

    - 一個連線可以同時在多個房間
    - 廣播失敗的連線會被清掉
    """

    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}
        self.rooms: Dict[str, Set[str]] = {}

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        client_id = uuid.uuid4().hex
        self.active_connections[client_id] = websocket
        logger.info(f"New client connected: {client_id}")
        return client_id

    def disconnect(self, client_id: str) -> None:
        self.active_connections.pop(client_id, None)
        for room_id in list(self.rooms):
            self.leave(client_id, room_id)
        logger.info(f"Client {client_id} disconnected. Active: {len(self.active_connections)}")

    def join(self, client_id: str, room_id: str) -> None:
        self.rooms.setdefault(room_id, set()).add(client_id)

    def leave(self, client_id: str, room_id: str) -> None:
        members = self.rooms.get(room_id)
        if members is None:
            return
        members.discard(client_id)
        if not members:
            del self.rooms[room_id]

    def members(self, room_id: str) -> Set[str]:
        return set(self.rooms.get(room_id, ()))

    async def send(self, client_id: str, message: dict) -> bool:
        websocket = self.active_connections.get(client_id)
        if websocket is None:
            return False
        await websocket.send_json(message)
        return True

    async def broadcast_to_room(self, room_id: str, message: dict, exclude: Optional[str] = None) -> None:
        """送給房間內所有成員（exclude 除外），送不出去的連線直接移除"""
        dead_connections = []

        for client_id in self.members(room_id):
            if client_id == exclude:
                continue
            websocket = self.active_connections.get(client_id)
            if websocket is None:
                dead_connections.append(client_id)
                continue
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning(f"Broadcast to {client_id} in room {room_id} failed: {e}")
                dead_connections.append(client_id)

        for client_id in dead_connections:
            self.disconnect(client_id)

