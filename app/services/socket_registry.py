from typing import Set

from fastapi import WebSocket
from loguru import logger


class SocketRegistry:
    """Live WebSocket connections. No message protocol is defined yet."""

    def __init__(self) -> None:
        self._sockets: Set[WebSocket] = set()

    def register(self, ws: WebSocket) -> None:
        self._sockets.add(ws)
        logger.info(f"WebSocket client connected | active={len(self._sockets)}")

    def unregister(self, ws: WebSocket) -> None:
        self._sockets.discard(ws)
        logger.info(f"WebSocket client disconnected | active={len(self._sockets)}")

    def __len__(self) -> int:
        return len(self._sockets)
