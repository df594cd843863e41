"""Direct-message delivery: resolve sender, validate, persist, enrich, fan out.

The pipeline is transport-agnostic. It is handed an ``emit`` coroutine with
python-socketio's ``AsyncServer.emit`` signature plus the two store
collaborators, so tests can drive it without a socket server or database.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from talkuu.messaging.models import Message
from talkuu.realtime.presence import PresenceRegistry
from talkuu.realtime.presence import normalize_user_id

logger = logging.getLogger(__name__)

RECEIVE_MESSAGE_EVENT = "receiveMessage"
MESSAGE_SENT_EVENT = "messageSent"

Emit = Callable[..., Awaitable[Any]]
SaveMessage = Callable[..., Awaitable[dict[str, Any]]]
ProjectUser = Callable[[Any], Awaitable[dict[str, Any] | None]]


class DeliveryError(Exception):
    """A send that is acknowledged as failed to the caller only."""

    code = "delivery_error"


class NotJoined(DeliveryError):  # noqa: N818
    code = "not_joined"


class InvalidPayload(DeliveryError):  # noqa: N818
    code = "invalid_payload"


class StoreError(DeliveryError):
    code = "store_error"


class Acknowledgement:
    """Single-use result channel for one inbound event.

    The first ``succeed``/``fail`` wins; later attempts are logged and
    ignored.
    """

    def __init__(self, event: str = "sendMessage") -> None:
        self.event = event
        self._result: dict[str, Any] | None = None

    @property
    def resolved(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> dict[str, Any] | None:
        return self._result

    def succeed(self, message: dict[str, Any]) -> bool:
        return self._resolve({"success": True, "message": message})

    def fail(self, error: DeliveryError) -> bool:
        return self._resolve(
            {"success": False, "error": error.code, "reason": str(error)},
        )

    def _resolve(self, result: dict[str, Any]) -> bool:
        if self._result is not None:
            logger.warning("Ignoring second acknowledgement for %s", self.event)
            return False
        self._result = result
        return True


@dataclass(frozen=True)
class SendMessageRequest:
    receiver_id: str
    content: str
    message_type: str = Message.Type.TEXT
    file_url: str = ""

    @classmethod
    def from_payload(cls, data: Any) -> SendMessageRequest:
        if not isinstance(data, dict):
            data = {}

        receiver_id = normalize_user_id(data.get("receiverId"))
        content = data.get("content")
        if (
            receiver_id is None
            or not isinstance(content, str)
            or not content.strip()
        ):
            msg = "receiverId and non-empty content are required"
            raise InvalidPayload(msg)

        message_type = data.get("messageType") or Message.Type.TEXT
        if message_type not in Message.Type.values:
            msg = f"Unsupported messageType: {message_type}"
            raise InvalidPayload(msg)

        file_url = data.get("fileUrl") or ""
        if not isinstance(file_url, str):
            msg = "fileUrl must be a string"
            raise InvalidPayload(msg)

        return cls(
            receiver_id=receiver_id,
            content=content.strip(),
            message_type=message_type,
            file_url=file_url.strip(),
        )


class MessageDeliveryPipeline:
    def __init__(
        self,
        *,
        registry: PresenceRegistry,
        emit: Emit,
        save: SaveMessage,
        project: ProjectUser,
        timeout: float | None = None,
    ) -> None:
        self.registry = registry
        self.emit = emit
        self.save = save
        self.project = project
        self.timeout = timeout

    async def send_message(self, connection_id: str, data: Any) -> dict[str, Any]:
        """Handle one ``sendMessage`` event and return its acknowledgement."""

        ack = Acknowledgement("sendMessage")
        try:
            message = await self._deliver(connection_id, data)
        except DeliveryError as exc:
            logger.warning(
                "sendMessage from %s rejected (%s): %s",
                connection_id,
                exc.code,
                exc,
            )
            ack.fail(exc)
        except Exception:
            logger.exception("Socket sendMessage error from %s", connection_id)
            ack.fail(StoreError("Server error"))
        else:
            ack.succeed(message)
        return ack.result  # type: ignore[return-value]

    async def _deliver(self, connection_id: str, data: Any) -> dict[str, Any]:
        # Captured once: a disconnect after this point does not abort the send.
        sender_id = self.registry.lookup_user(connection_id)
        if sender_id is None:
            msg = "Not joined"
            raise NotJoined(msg)

        request = SendMessageRequest.from_payload(data)

        try:
            message = await asyncio.wait_for(
                self._persist_and_enrich(sender_id, request),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            msg = "Timed out storing message"
            raise StoreError(msg) from exc

        receiver_connection = self.registry.lookup_connection(request.receiver_id)
        if receiver_connection is not None:
            await self.emit(RECEIVE_MESSAGE_EVENT, message, to=receiver_connection)
        await self.emit(MESSAGE_SENT_EVENT, message, to=connection_id)

        logger.info(
            "Message %s delivered from %s to %s (%s)",
            message.get("id"),
            sender_id,
            request.receiver_id,
            "online" if receiver_connection else "offline",
        )
        return message

    async def _persist_and_enrich(
        self,
        sender_id: str,
        request: SendMessageRequest,
    ) -> dict[str, Any]:
        try:
            record = await self.save(
                sender_id=sender_id,
                receiver_id=request.receiver_id,
                content=request.content,
                message_type=request.message_type,
                file_url=request.file_url,
            )
        except Exception as exc:
            msg = "Failed to store message"
            raise StoreError(msg) from exc

        try:
            sender = await self.project(sender_id)
            receiver = await self.project(request.receiver_id)
        except Exception as exc:
            msg = "Failed to load message participants"
            raise StoreError(msg) from exc

        return {**record, "sender": sender, "receiver": receiver}
