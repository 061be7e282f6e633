"""Realtime WebSocket subscription route"""

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
import logging

from adapters import broadcaster
from domain.enums import Channel

router = APIRouter(tags=["Realtime"])
logger = logging.getLogger("potluck.api.realtime")

CHANNELS = {channel.value for channel in Channel}


@router.websocket("/cable")
async def cable(websocket: WebSocket, channel: str = Query(...)):
    """
    Subscribe to one broadcast channel (``notifications`` or ``grocery_list``).

    The server only pushes; anything the client sends is ignored.
    """
    if channel not in CHANNELS:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    broadcaster.subscribe(channel, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Subscriber left %s", channel)
    finally:
        broadcaster.unsubscribe(channel, websocket)
