"""
並發控制工具

提供 Room-level 的鎖定機制，防止 read-modify-write 的競態條件（Race Condition）

Store 本身只保證單一 key 寫入的原子性，沒有 SELECT ... FOR UPDATE 可用，
所以同一個房間的所有修改（生成、收集、過期）都在行程內排隊執行
"""
import asyncio
from typing import Dict


class RoomLocks:
    """
    每個房間一把 asyncio.Lock

    範例：
        async with room_locks.for_room(room_id):
            coin_set = await store.load(room_id)
            ...
            await store.save(room_id, coin_set)

    注意：
        - 鎖只在同一個 event loop 內有效
        - 不同房間之間互不阻塞
        - 讀取（list_available）不需要拿鎖
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def for_room(self, room_id: str) -> asyncio.Lock:
        lock = self._locks.get(room_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[room_id] = lock
        return lock
