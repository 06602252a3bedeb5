"""Chat broadcast hub.

Every connection's reader publishes decoded messages onto one shared queue;
a single hub task drains it and writes each message to a snapshot of the
registry. All outbound writes therefore happen on the hub task, one message
at a time, in queue order.
"""
from __future__ import annotations
from contextlib import suppress
from typing import Optional
from realtime import ChatConnection, ChatTransportError, ConnectionRegistry
from schemas.chat import ChatMessage
import asyncio
import logging

logger = logging.getLogger(__name__)


async def write_message(conn: ChatConnection, message: ChatMessage) -> bool:
    """Send one message to one connection. No retries; False means the connection is dead."""
    try:
        await conn.write_message(message)
    except ChatTransportError as e:
        logger.warning("Chat write failed: %s", e)
        return False
    return True


class BroadcastHub:
    def __init__(self, registry: ConnectionRegistry, maxsize: int = 0) -> None:
        self.registry = registry
        # Bounded queue: publishers wait when the hub falls behind, nothing is dropped
        self._inbound: asyncio.Queue[ChatMessage] = asyncio.Queue(maxsize=maxsize)
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> int:
        return self._inbound.qsize()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def publish(self, message: ChatMessage) -> None:
        await self._inbound.put(message)

    async def fan_out(self, message: ChatMessage) -> int:
        delivered = 0
        for conn in self.registry.snapshot():
            if await write_message(conn, message):
                delivered += 1
            else:
                await self.registry.remove(conn)
        return delivered

    async def run(self) -> None:
        while True:
            message = await self._inbound.get()
            try:
                await self.fan_out(message)
            except Exception:
                logger.exception("Chat fan-out crashed; continuing with next message")
            finally:
                self._inbound.task_done()

    async def drain(self) -> None:
        """Wait until every published message has been fanned out."""
        await self._inbound.join()

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self.run(), name="chat-broadcast-hub")
            logger.info("Chat broadcast hub started")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Chat broadcast hub stopped")


async def read_loop(conn: ChatConnection, registry: ConnectionRegistry, hub: BroadcastHub) -> None:
    """Forward every message read from conn to the hub until the transport fails."""
    try:
        while True:
            message = await conn.read_message()
            await hub.publish(message)
    except ChatTransportError as e:
        logger.info("Chat read ended: %s", e)
    finally:
        await registry.remove(conn)
