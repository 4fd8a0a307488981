from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.core import config
from app.core.db import SessionLocal
from app.core.init_db import init_db
from app.core.logging import setup_logging
from app.api.router import api_router
from app.api.routes import ws
from app.services.avatar_cache import AvatarCache
from app.services.avatar_resolver import AvatarResolver
from app.services.profile_repository import ProfileRepository
from app.services.profile_service import ProfileService
from app.services.proximity import ProximityMatcher
from app.services.socket_registry import SocketRegistry
from app.services.telegram import TelegramClient

setup_logging()
logger.info("Starting Peone backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Init DB before serving
    init_db()

    telegram = TelegramClient(
        token=config.TELEGRAM_TOKEN,
        api_base=config.TELEGRAM_API_BASE,
        timeout=config.TELEGRAM_TIMEOUT_SECONDS,
    )
    cache = AvatarCache(
        default_ttl_seconds=config.AVATAR_CACHE_TTL_SECONDS,
        max_size=config.AVATAR_CACHE_MAX_SIZE,
    )
    resolver = AvatarResolver(telegram, cache)

    app.state.profile_service = ProfileService(
        repository=ProfileRepository(SessionLocal),
        resolver=resolver,
        matcher=ProximityMatcher(resolver, radius_meters=config.NEARBY_RADIUS_METERS),
    )
    app.state.socket_registry = SocketRegistry()
    logger.info("Avatar resolver ready")

    yield

    await telegram.aclose()
    logger.info("Peone backend stopped")


app = FastAPI(
    title="Peone Backend",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Profile + nearby API
app.include_router(api_router)

# WebSocket registry
app.include_router(ws.router)


@app.get("/health")
def health():
    logger.debug("Health check hit")
    return {"status": "ok"}
