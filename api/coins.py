"""
Coin API Endpoints

職責：
1. 查詢房間目前可收集的 Coin（唯讀）
2. 列出設定中的房間

所有錯誤都以 500 + {"error": message} 回應，不改變任何狀態
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import List
import logging

from schemas import Coin, ErrorResponse, RoomConfig
from core.coin_manager import CoinManager
from core.dependencies import get_coin_manager
from core.exceptions import CoinGameException

router = APIRouter(prefix="/api/rooms", tags=["coins"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[RoomConfig])
def list_rooms(manager: CoinManager = Depends(get_coin_manager)):
    """列出所有設定中的房間（依照設定順序）"""
    return manager.registry.all()


@router.get(
    "/{room_id}/coins",
    response_model=List[Coin],
    responses={500: {"model": ErrorResponse}},
)
async def get_coins(room_id: str, manager: CoinManager = Depends(get_coin_manager)):
    """
    取得房間目前可收集的 Coin

    返回：
        Coin 列表；未生成或已過期的房間返回空列表

    錯誤：
        500 {"error": message}：Store 無法使用等錯誤
    """
    try:
        return await manager.list_available(room_id)

    except CoinGameException as e:
        logger.warning(f"Failed to get coins for room {room_id}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Failed to get coins: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal error"})
