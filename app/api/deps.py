from fastapi import Request, WebSocket

from app.services.profile_service import ProfileService
from app.services.socket_registry import SocketRegistry


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_socket_registry(websocket: WebSocket) -> SocketRegistry:
    return websocket.app.state.socket_registry
