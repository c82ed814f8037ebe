"""
FastAPI dependencies

CoinManager 與 ConnectionManager 在 lifespan 中建立並掛在 app.state 上，
HTTP 與 WebSocket 都透過這裡取得同一個 app 的實例
"""
from fastapi import Request, WebSocket

from core.coin_manager import CoinManager
from core.connections import ConnectionManager


def get_coin_manager(request: Request) -> CoinManager:
    return request.app.state.coin_manager


def get_ws_coin_manager(websocket: WebSocket) -> CoinManager:
    return websocket.app.state.coin_manager


def get_ws_connections(websocket: WebSocket) -> ConnectionManager:
    return websocket.app.state.connections
