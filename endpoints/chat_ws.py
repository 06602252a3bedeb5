from fastapi import APIRouter, WebSocket, status
from chat_hub import BroadcastHub, read_loop
from realtime import ChatConnection, ConnectionRegistry
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


def _origin_allowed(websocket: WebSocket) -> bool:
    allowed = websocket.app.state.settings.chat_allowed_origins
    if "*" in allowed:
        return True
    origin = websocket.headers.get("origin")
    # Non-browser clients send no Origin header
    return origin is None or origin in allowed


@router.websocket("/ws")
async def chat_ws(websocket: WebSocket):
    registry: ConnectionRegistry = websocket.app.state.chat_registry
    hub: BroadcastHub = websocket.app.state.chat_hub
    if not _origin_allowed(websocket):
        logger.warning("Chat upgrade rejected for origin %s", websocket.headers.get("origin"))
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    try:
        await websocket.accept()
    except Exception as e:
        logger.warning("Chat upgrade failed: %s", e)
        return
    conn = ChatConnection(websocket)
    registry.add(conn)
    await read_loop(conn, registry, hub)
