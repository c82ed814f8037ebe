"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層與 WebSocket 層統一處理
"""


class CoinGameException(Exception):
    """所有遊戲異常的基類"""
    pass


# ============ Room 相關異常 ============

class RoomNotFound(CoinGameException):
    """房間不存在（不在靜態設定中）"""
    def __init__(self, room_id, message=None):
        self.room_id = room_id
        super().__init__(message or f"Room {room_id} not found")


class CoinsUnavailable(RoomNotFound):
    """
    房間存在於設定中，但 Store 裡沒有它的 Coin 狀態

    可能是已過期，也可能是尚未生成；Store 無法區分這兩者。
    繼承 RoomNotFound，只認得 RoomNotFound 的呼叫者不需要修改
    """
    def __init__(self, room_id):
        super().__init__(
            room_id,
            f"Room {room_id} has no coins (expired or not generated)"
        )


# ============ Coin 相關異常 ============

class CoinNotFound(CoinGameException):
    """Coin 不在目前的集合中（已被收集，或從未存在）"""
    def __init__(self, room_id, coin_id):
        self.room_id = room_id
        self.coin_id = coin_id
        super().__init__(f"Coin {coin_id} not found in room {room_id}")


# ============ Store 相關異常 ============

class StoreUnavailable(CoinGameException):
    """Key-value backend 無法連線或操作失敗"""
    pass
