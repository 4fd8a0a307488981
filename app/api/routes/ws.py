from fastapi import APIRouter, Depends, WebSocket
from loguru import logger

from app.api.deps import get_socket_registry
from app.services.socket_registry import SocketRegistry

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    registry: SocketRegistry = Depends(get_socket_registry),
):
    registry.register(websocket)
    try:
        await websocket.accept()
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            # no protocol yet: text and binary frames are both dropped
            payload = message.get("text") or message.get("bytes") or ""
            logger.debug(f"WebSocket message ignored | size={len(payload)}")
    finally:
        registry.unregister(websocket)
