"""
Room State Store：房間 Coin 狀態的 key-value 抽象層

職責：
1. load：讀取房間的 CoinSet（沒有則返回 None）
2. save：整筆覆寫房間的 CoinSet（單一 key 的原子寫入）
3. clear：刪除房間的 key（不存在也不算錯誤）

原則：
- 不做行程內快取，每次操作都直接打到資料庫，資料庫是唯一真相
- 阻塞的 SQLAlchemy 操作丟到 threadpool，每個操作都是一個 await 點
- 所有 SQLAlchemyError 與損毀的資料一律轉成 StoreUnavailable
"""
from typing import Optional
import logging

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from models import RoomState
from schemas import CoinSet
from core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def read_room_state(db: Session, room_id: str) -> Optional[str]:
    row = db.get(RoomState, room_id)
    return row.payload if row else None


def write_room_state(db: Session, room_id: str, payload: str) -> None:
    # merge = 依主鍵 upsert，整個動作在同一個 transaction 內
    db.merge(RoomState(room_id=room_id, payload=payload))
    db.commit()


def delete_room_state(db: Session, room_id: str) -> bool:
    deleted = db.query(RoomState).filter(RoomState.room_id == room_id).delete()
    db.commit()
    return deleted > 0


class RoomStateStore:
    """
    以 SQLAlchemy 表實作的 key-value Store

    參數：
        session_factory: sessionmaker，每次操作建立一個短生命週期的 Session
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _run(self, func, *args):
        db = self._session_factory()
        try:
            return func(db, *args)
        except SQLAlchemyError as e:
            logger.error(f"Store operation {func.__name__} failed: {e}", exc_info=True)
            db.rollback()
            raise StoreUnavailable(f"Room state store failed: {e}") from e
        finally:
            db.close()

    async def load(self, room_id: str) -> Optional[CoinSet]:
        """
        讀取房間目前的 CoinSet

        返回：
            CoinSet，key 不存在時返回 None

        異常：
            StoreUnavailable: 資料庫無法連線、查詢失敗，或存放的資料已損毀
        """
        payload = await run_in_threadpool(self._run, read_room_state, room_id)
        if payload is None:
            return None
        try:
            return CoinSet.model_validate_json(payload)
        except ValidationError as e:
            raise StoreUnavailable(f"Corrupt room state for room {room_id}: {e}") from e

    async def save(self, room_id: str, coin_set: CoinSet) -> None:
        """
        覆寫房間的 CoinSet

        異常：
            StoreUnavailable: 資料庫無法連線或寫入失敗
        """
        payload = coin_set.model_dump_json()
        await run_in_threadpool(self._run, write_room_state, room_id, payload)

    async def clear(self, room_id: str) -> bool:
        """
        刪除房間的 key

        返回：
            True 如果真的刪除了資料，key 原本就不存在時返回 False
        """
        deleted = await run_in_threadpool(self._run, delete_room_state, room_id)
        if not deleted:
            logger.debug(f"Clear on empty key for room {room_id}")
        return deleted
