"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("TELEGRAM_TOKEN", "test-token")
os.environ.setdefault("TELEGRAM_API_BASE", "https://api.telegram.test")


class FakeTelegram:
    """Scriptable stand-in for the Bot API, served through httpx.MockTransport.

    ``photos`` maps user id -> file_id (None = no photo), ``files`` maps
    file_id -> file_path. Users listed in ``failing`` get an HTTP 502.
    """

    def __init__(self) -> None:
        self.photos: dict[str, str | None] = {}
        self.files: dict[str, str] = {}
        self.failing: set[str] = set()
        self.calls: list[tuple[str, dict[str, str]]] = []

    def calls_for(self, method: str) -> list[dict[str, str]]:
        return [params for name, params in self.calls if name == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        params = dict(request.url.params)
        self.calls.append((method, params))

        if method == "getUserProfilePhotos":
            user_id = params["user_id"]
            if user_id in self.failing:
                return httpx.Response(502, json={"ok": False, "description": "Bad Gateway"})
            file_id = self.photos.get(user_id)
            photos = [] if file_id is None else [[
                {"file_id": f"{file_id}-small", "width": 160, "height": 160},
                {"file_id": file_id, "width": 640, "height": 640},
            ]]
            return httpx.Response(
                200, json={"ok": True, "result": {"total_count": len(photos), "photos": photos}}
            )

        if method == "getFile":
            file_id = params["file_id"]
            result: dict[str, Any] = {"file_id": file_id}
            if file_id in self.files:
                result["file_path"] = self.files[file_id]
            return httpx.Response(200, json={"ok": True, "result": result})

        return httpx.Response(404, json={"ok": False, "description": "Not Found"})

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_telegram() -> FakeTelegram:
    """Provide an empty fake Bot API."""
    return FakeTelegram()


@pytest.fixture
def telegram_client(fake_telegram: FakeTelegram):
    """Provide a TelegramClient wired to the fake Bot API."""
    from app.services.telegram import TelegramClient

    return TelegramClient(
        token="test-token",
        api_base="https://api.telegram.test",
        http_client=fake_telegram.http_client(),
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fresh_db() -> Generator[None, None, None]:
    """Recreate all tables on the shared in-memory database."""
    from app.core.db import Base, engine
    from app.core.init_db import init_db

    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_profile() -> Callable[..., Any]:
    """Build a ProfileOut with sensible defaults."""
    from app.schemas.profile import ProfileOut

    def _make(telegram_id: str, lat: float | None = 0.0, lng: float | None = 0.0, **kw: Any):
        return ProfileOut(telegram_id=telegram_id, latitude=lat, longitude=lng, **kw)

    return _make
