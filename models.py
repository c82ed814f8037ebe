"""
SQLAlchemy Models

Store 只需要一張 key-value 表：
- room_id 是 key
- payload 是序列化後的 CoinSet（JSON 字串）
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RoomState(Base):
    __tablename__ = "room_states"

    room_id = Column(String(255), primary_key=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
