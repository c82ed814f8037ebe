"""
Coin Manager：管理房間 Coin 的完整生命週期

職責：
1. 生成 Coin（寫入 Store + 排程過期）
2. 查詢目前可收集的 Coin
3. 收集 Coin（從集合中移除）
4. 過期（整組刪除）

原則：
- 房間設定由外部注入（RoomRegistry），不讀全域變數
- 同一房間的所有修改都經過 RoomLocks 排隊，收集不同 Coin 不會互相覆蓋
- 錯誤不在這裡重試，直接往上拋給 API / WebSocket 層
- 任何錯誤路徑都不會留下部分寫入
"""
import asyncio
import logging
import random
from typing import Dict, List, Set

from schemas import Coin, CoinSet
from core.exceptions import CoinNotFound, CoinsUnavailable
from core.locks import RoomLocks
from core.room_registry import RoomRegistry
from core.room_store import RoomStateStore
from services.spawn_service import generate_coins

logger = logging.getLogger(__name__)


class CoinManager:
    """Coin 生命週期管理器"""

    def __init__(
        self,
        registry: RoomRegistry,
        store: RoomStateStore,
        expire_seconds: float,
        rng=random,
    ):
        self.registry = registry
        self.store = store
        self.expire_seconds = expire_seconds
        self._rng = rng
        self._locks = RoomLocks()
        self._epochs: Dict[str, int] = {}
        self._expirations: Set[asyncio.Task] = set()

    async def generate(self, room_id: str) -> List[Coin]:
        """
        為房間生成新的一組 Coin

        流程：
        1. 查詢房間設定
        2. 決定新的 epoch（比記憶體與 Store 中的都大）
        3. 生成 Coin 並整組覆寫 Store
        4. 排程過期

        參數：
            room_id: 房間 ID

        返回：
            新生成的 Coin 列表

        異常：
            RoomNotFound: 房間不在設定中
            StoreUnavailable: Store 讀寫失敗（此時不會排程過期）

        注意：
            - 會直接取代舊的集合，之前的收集紀錄全部丟棄
        """
        room_config = self.registry.get(room_id)

        async with self._locks.for_room(room_id):
            current = await self.store.load(room_id)
            stored_epoch = current.epoch if current else 0
            epoch = max(self._epochs.get(room_id, 0), stored_epoch) + 1

            coins = generate_coins(room_config, self._rng)
            await self.store.save(room_id, CoinSet(epoch=epoch, coins=coins))
            self._epochs[room_id] = epoch

        self._schedule_expiration(room_id, epoch)
        logger.info(f"Generated {len(coins)} coins for room {room_id} (epoch={epoch})")
        return coins

    async def generate_all(self) -> None:
        """依照設定順序為每個房間生成 Coin（啟動時呼叫一次）"""
        for room in self.registry.all():
            await self.generate(room.id)

    async def list_available(self, room_id: str) -> List[Coin]:
        """
        取得房間目前可收集的 Coin

        Key 不存在時（未生成、已過期、未知房間）一律返回空列表

        異常：
            StoreUnavailable: Store 讀取失敗
        """
        coin_set = await self.store.load(room_id)
        if coin_set is None:
            return []
        return coin_set.coins

    async def collect(self, room_id: str, coin_id: str) -> Coin:
        """
        收集一枚 Coin

        前置條件：
        1. 房間必須在設定中
        2. Store 中必須有該房間的集合
        3. coin_id 必須還在集合中

        參數：
            room_id: 房間 ID
            coin_id: Coin ID

        返回：
            被收集的 Coin

        異常：
            RoomNotFound: 房間不在設定中
            CoinsUnavailable: 房間存在但沒有狀態（已過期或尚未生成）
            CoinNotFound: Coin 已被收集或不存在（不會寫入 Store）
            StoreUnavailable: Store 讀寫失敗
        """
        self.registry.get(room_id)

        async with self._locks.for_room(room_id):
            coin_set = await self.store.load(room_id)
            if coin_set is None:
                raise CoinsUnavailable(room_id)

            remaining = [coin for coin in coin_set.coins if coin.id != coin_id]
            if len(remaining) == len(coin_set.coins):
                raise CoinNotFound(room_id, coin_id)

            collected = next(coin for coin in coin_set.coins if coin.id == coin_id)
            await self.store.save(room_id, CoinSet(epoch=coin_set.epoch, coins=remaining))

        logger.info(
            f"Coin {coin_id} collected in room {room_id} ({len(remaining)} remaining)"
        )
        return collected

    async def expire(self, room_id: str, epoch: int) -> bool:
        """
        刪除某一世代的 Coin

        只有 Store 中的 epoch 仍等於排程時的 epoch 才會刪除，
        避免舊的過期任務刪掉新生成的集合

        返回：
            True 如果真的刪除了資料
        """
        async with self._locks.for_room(room_id):
            current = await self.store.load(room_id)
            if current is None:
                return False
            if current.epoch != epoch:
                logger.warning(
                    f"Skipping stale expiration for room {room_id} "
                    f"(armed epoch={epoch}, stored epoch={current.epoch})"
                )
                return False
            await self.store.clear(room_id)

        logger.info(f"Expired coins for room {room_id} (epoch={epoch})")
        return True

    def _schedule_expiration(self, room_id: str, epoch: int) -> None:
        task = asyncio.create_task(self._expire_later(room_id, epoch))
        self._expirations.add(task)
        task.add_done_callback(self._expirations.discard)

    async def _expire_later(self, room_id: str, epoch: int) -> None:
        await asyncio.sleep(self.expire_seconds)
        try:
            await self.expire(room_id, epoch)
        except Exception as e:
            logger.error(f"Failed to expire coins for room {room_id}: {e}", exc_info=True)

    @property
    def pending_expirations(self) -> int:
        return len(self._expirations)

    async def close(self) -> None:
        """行程結束時取消尚未觸發的過期任務"""
        tasks = list(self._expirations)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._expirations.clear()
