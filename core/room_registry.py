"""
Room Registry：靜態房間設定的唯讀查詢表

啟動時由 Settings.rooms 建立一次，之後不可修改
"""
from types import MappingProxyType
from typing import Iterable, List

from schemas import RoomConfig
from core.exceptions import RoomNotFound


class RoomRegistry:
    """room_id -> RoomConfig 的 O(1) 查詢"""

    def __init__(self, rooms: Iterable[RoomConfig]):
        configs = {}
        for room in rooms:
            if room.id in configs:
                raise ValueError(f"Duplicate room id in configuration: {room.id}")
            configs[room.id] = room
        self._rooms = MappingProxyType(configs)

    def get(self, room_id: str) -> RoomConfig:
        """
        取得房間設定

        異常：
            RoomNotFound: room_id 不在設定中
        """
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def __contains__(self, room_id) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def all(self) -> List[RoomConfig]:
        """依照設定順序返回所有房間"""
        return list(self._rooms.values())
