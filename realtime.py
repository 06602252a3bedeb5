"""WebSocket connection tracking for the chat relay.

ChatConnection wraps one accepted WebSocket and speaks the chat wire format.
ConnectionRegistry is the live set of connections the broadcast hub writes to;
it is shared by the accept path, every reader task and the hub.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple
from fastapi import WebSocket
from pydantic import ValidationError
from schemas.chat import ChatMessage
import logging
import threading
import uuid

logger = logging.getLogger(__name__)


class ChatTransportError(Exception):
    """Read or write on a chat connection failed, or the peer went away."""

    def __init__(self, handle: str, reason: str):
        super().__init__(f"connection {handle}: {reason}")
        self.handle = handle
        self.reason = reason


class ChatDecodeError(ChatTransportError):
    """Inbound frame was not a valid chat message."""


class ChatConnection:
    def __init__(self, websocket: WebSocket, handle: Optional[str] = None) -> None:
        self.websocket = websocket
        self.handle = handle or uuid.uuid4().hex
        self._closed = False

    def __repr__(self) -> str:
        return f"ChatConnection({self.handle!r}, closed={self._closed})"

    @property
    def closed(self) -> bool:
        return self._closed

    async def read_message(self) -> ChatMessage:
        try:
            frame = await self.websocket.receive()
        except Exception as e:
            raise ChatTransportError(self.handle, f"receive failed: {e}") from e
        if frame["type"] == "websocket.disconnect":
            raise ChatTransportError(self.handle, f"peer closed (code {frame.get('code', 1000)})")
        payload = frame.get("text")
        if payload is None:
            payload = frame.get("bytes")
        if payload is None:
            raise ChatDecodeError(self.handle, "empty frame")
        try:
            return ChatMessage.model_validate_json(payload)
        except ValidationError as e:
            raise ChatDecodeError(self.handle, f"malformed message: {e.error_count()} error(s)") from e

    async def write_message(self, message: ChatMessage) -> None:
        if self._closed:
            raise ChatTransportError(self.handle, "connection closed")
        try:
            await self.websocket.send_text(message.model_dump_json())
        except Exception as e:
            raise ChatTransportError(self.handle, f"send failed: {e}") from e

    async def close(self, code: int = 1000) -> bool:
        """Close the socket once. Returns False if it was already closed."""
        if self._closed:
            return False
        self._closed = True
        try:
            await self.websocket.close(code=code)
        except Exception as e:
            # Peer already gone; the socket is unusable either way
            logger.debug("Close of %s ignored: %s", self.handle, e)
        return True


class ConnectionRegistry:
    def __init__(self) -> None:
        # Map handle -> connection
        self._conns: Dict[str, ChatConnection] = {}
        # Plain lock: no awaits happen while it is held, and other threads may inspect membership
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._conns)

    def __contains__(self, conn: object) -> bool:
        handle = conn.handle if isinstance(conn, ChatConnection) else conn
        with self._lock:
            return handle in self._conns

    def add(self, conn: ChatConnection) -> bool:
        with self._lock:
            if conn.handle in self._conns:
                return False
            self._conns[conn.handle] = conn
            total = len(self._conns)
        logger.info("Chat connection %s registered (%d total)", conn.handle, total)
        return True

    async def remove(self, conn: ChatConnection) -> bool:
        with self._lock:
            removed = self._conns.pop(conn.handle, None) is not None
            total = len(self._conns)
        if not removed:
            return False
        # Only the caller that popped the entry closes it
        await conn.close()
        logger.info("Chat connection %s removed (%d total)", conn.handle, total)
        return True

    def snapshot(self) -> Tuple[ChatConnection, ...]:
        with self._lock:
            return tuple(self._conns.values())

    async def close_all(self) -> int:
        with self._lock:
            conns = list(self._conns.values())
            self._conns.clear()
        for conn in conns:
            await conn.close(code=1001)
        if conns:
            logger.info("Closed %d chat connection(s) on shutdown", len(conns))
        return len(conns)
