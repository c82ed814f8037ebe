from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from database import Base, Settings, build_engine, build_session_factory, get_settings
from api import coins, websocket
from core.coin_manager import CoinManager
from core.connections import ConnectionManager
from core.room_registry import RoomRegistry
from core.room_store import RoomStateStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: 建立資料表，為每個房間生成 Coin 並排程過期
        engine = build_engine(settings.database_url)
        Base.metadata.create_all(bind=engine)

        store = RoomStateStore(build_session_factory(engine))
        manager = CoinManager(
            registry=RoomRegistry(settings.rooms),
            store=store,
            expire_seconds=settings.coin_expire_seconds,
        )
        app.state.coin_manager = manager
        app.state.connections = ConnectionManager()
        await manager.generate_all()
        logger.info(f"Coin manager ready with {len(manager.registry)} rooms")

        yield

        # Shutdown: 尚未觸發的過期任務隨行程結束一起取消
        await manager.close()
        engine.dispose()

    app = FastAPI(
        title="Coin Game API",
        description="Backend API for real-time room coin collection",
        version="1.0.0",
        lifespan=lifespan
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure this properly in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(coins.router)
    app.include_router(websocket.router)

    @app.get("/")
    def root():
        return {"message": "Coin Game API", "status": "ok"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
