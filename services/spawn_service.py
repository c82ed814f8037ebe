"""
生成服務：在房間的 Bounding Volume 內隨機放置 Coin

純計算邏輯，不涉及狀態轉換，也不寫入 Store
"""
import random
from typing import List

from schemas import Area, Coin, Position, RoomConfig
from services.naming_service import generate_coin_id


def random_position(area: Area, rng=random) -> Position:
    """
    在 area 內均勻取一個整數座標

    每個軸獨立取樣，min 與 max 都包含在內
    """
    return Position(
        x=rng.randint(area.xmin, area.xmax),
        y=rng.randint(area.ymin, area.ymax),
        z=rng.randint(area.zmin, area.zmax),
    )


def generate_coins(room_config: RoomConfig, rng=random) -> List[Coin]:
    """
    為房間生成一組新的 Coin

    參數：
        room_config: 房間設定
        rng: 亂數來源（測試時可傳入固定 seed 的 random.Random）

    返回：
        剛好 coin_count 個 Coin，ID 在集合內唯一

    注意：
        - 不保證座標唯一，兩個 Coin 可能落在同一點
        - min > max 的設定在載入時就會被 RoomConfig 擋下
    """
    return [
        Coin(
            id=generate_coin_id(room_config.id, index),
            position=random_position(room_config.area, rng),
        )
        for index in range(room_config.coin_count)
    ]
