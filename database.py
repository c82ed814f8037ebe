from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List

from schemas import Area, RoomConfig


def default_rooms() -> List[RoomConfig]:
    return [
        RoomConfig(
            id="room1",
            coin_count=10,
            area=Area(xmin=0, xmax=10, ymin=0, ymax=10, zmin=0, zmax=10),
        ),
    ]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./coin_game.db"
    coin_expire_seconds: float = 3600.0
    rooms: List[RoomConfig] = default_rooms()
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings():
    return Settings()


def build_engine(database_url: str) -> Engine:
    """
    依照 database_url 建立 SQLAlchemy Engine

    SQLite 需要特殊設定：connect_args={"check_same_thread": False}
    Store 的操作都丟到 threadpool 執行，同一個連線可能被不同執行緒使用
    """
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {},
        pool_pre_ping=True
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


Base = declarative_base()
