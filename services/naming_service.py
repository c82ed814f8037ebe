"""
命名服務：生成 Coin ID

純計算邏輯，不涉及狀態轉換
"""


def generate_coin_id(room_id: str, index: int) -> str:
    """
    依照房間與生成順序產生 Coin ID

    格式：coin_{room_id}_{index}
    範例：coin_room1_0, coin_room1_1, ...

    注意：
    - 只在同一次生成內唯一
    - 重新生成時會重複使用相同的 ID
    """
    return f"coin_{room_id}_{index}"
