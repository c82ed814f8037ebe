"""
Pydantic Schemas

靜態設定（Area / RoomConfig）與 Coin 狀態的資料結構，
同時作為 API 回應格式與 Store 的序列化格式
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List


class Area(BaseModel):
    """房間的 Bounding Volume（三軸皆為閉區間 [min, max]）"""
    model_config = ConfigDict(frozen=True)

    xmin: int
    xmax: int
    ymin: int
    ymax: int
    zmin: int
    zmax: int

    @model_validator(mode="after")
    def check_bounds(self):
        for axis in ("x", "y", "z"):
            low = getattr(self, f"{axis}min")
            high = getattr(self, f"{axis}max")
            if low > high:
                raise ValueError(f"{axis}min ({low}) must not exceed {axis}max ({high})")
        return self


class RoomConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique room id (e.g., room1)")
    coin_count: int = Field(..., ge=0, description="Number of coins per generation")
    area: Area


class Position(BaseModel):
    x: int
    y: int
    z: int


class Coin(BaseModel):
    id: str
    position: Position


class CoinSet(BaseModel):
    """
    單一房間在 Store 中的值

    epoch 是該房間的生成世代，過期任務用它判斷自己是否已經過時
    """
    epoch: int
    coins: List[Coin] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
