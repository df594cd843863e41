"""Global Socket.IO server for the frontend.

Frontend convention (socket.io-client):
- URL base: the API host
- Socket.IO path: ``settings.SOCKETIO_PATH`` (``/socket.io/`` by default)
- After connecting the client emits ``join`` with its user id, then
  ``sendMessage`` with an ack callback for every direct message.

Identity on ``join`` is trusted as-is; verifying it belongs to the caller is
the job of the HTTP auth layer in front of this service.
"""

from __future__ import annotations

import logging
from typing import Any

import socketio
from django.conf import settings

from talkuu.messaging.store import aproject_user
from talkuu.messaging.store import asave_message
from talkuu.realtime.delivery import MessageDeliveryPipeline
from talkuu.realtime.presence import PresenceRegistry

logger = logging.getLogger(__name__)


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=settings.SOCKETIO_CORS_ALLOWED_ORIGINS,
    logger=False,
    engineio_logger=False,
)

presence = PresenceRegistry()

pipeline = MessageDeliveryPipeline(
    registry=presence,
    emit=sio.emit,
    save=asave_message,
    project=aproject_user,
    timeout=settings.REALTIME_STORE_TIMEOUT,
)


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    logger.info("User connected: %s", sid)


@sio.event
async def join(sid: str, user_id: Any = None):
    try:
        key = presence.join(user_id, sid)
    except ValueError as exc:
        logger.warning("Rejected join from %s: %s", sid, exc)
        return {"success": False, "reason": str(exc)}

    logger.info("User %s joined on %s", key, sid)
    return {"success": True}


@sio.on("sendMessage")
async def send_message(sid: str, data: Any = None):
    # The return value is delivered as the client's ack callback payload.
    return await pipeline.send_message(sid, data)


@sio.event
async def disconnect(sid: str, *args: Any):
    user_id = presence.remove(sid)
    logger.info("User disconnected: %s (user %s)", sid, user_id)
