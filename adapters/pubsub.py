"""
In-process realtime broadcaster.

WebSocket connections subscribe to a named channel; request handlers (which
run in FastAPI's threadpool) publish plain dict payloads to it. Delivery is
scheduled on the event loop that owns the sockets and is fire-and-forget:
a failed send drops that subscriber and never reaches the publisher.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket

logger = logging.getLogger("potluck.broadcaster")


class Broadcaster:
    def __init__(self) -> None:
        self._subscribers: Dict[str, Set[WebSocket]] = defaultdict(set)
        self._lock = threading.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def subscribe(self, channel: str, websocket: WebSocket) -> None:
        """Register ``websocket`` on ``channel``; must be called from the event loop."""
        self._loop = asyncio.get_running_loop()
        with self._lock:
            self._subscribers[channel].add(websocket)
        logger.info("Subscriber joined %s (%d total)", channel, self.subscriber_count(channel))

    def unsubscribe(self, channel: str, websocket: WebSocket) -> None:
        with self._lock:
            subscribers = self._subscribers.get(channel)
            if subscribers is not None:
                subscribers.discard(websocket)

    def subscriber_count(self, channel: str) -> int:
        with self._lock:
            return len(self._subscribers.get(channel, ()))

    def publish(self, channel: str, payload: Dict[str, Any]) -> None:
        """Schedule ``payload`` for every subscriber of ``channel``; returns immediately."""
        with self._lock:
            targets = list(self._subscribers.get(channel, ()))
        loop = self._loop
        if not targets or loop is None or loop.is_closed():
            return

        for websocket in targets:
            coro = self._send(channel, websocket, payload)
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None
            if running is loop:
                loop.create_task(coro)
            else:
                asyncio.run_coroutine_threadsafe(coro, loop)

    async def _send(self, channel: str, websocket: WebSocket, payload: Dict[str, Any]) -> None:
        try:
            await websocket.send_json(payload)
        except Exception:
            logger.warning("Dropping subscriber on %s after failed send", channel, exc_info=True)
            self.unsubscribe(channel, websocket)


broadcaster = Broadcaster()
