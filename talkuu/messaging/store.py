"""ORM-backed collaborators for the realtime delivery pipeline.

The sync functions are the unit of work; the ``a*`` variants wrap them with
``database_sync_to_async`` so Socket.IO handlers can await them without
blocking the event loop.
"""

from __future__ import annotations

from typing import Any

from channels.db import database_sync_to_async
from django.contrib.auth import get_user_model

from talkuu.messaging.api.serializers import MessageSerializer
from talkuu.messaging.models import Message
from talkuu.users.api.serializers import UserSummarySerializer

User = get_user_model()


def save_message(
    *,
    sender_id: Any,
    receiver_id: Any,
    content: str,
    message_type: str = Message.Type.TEXT,
    file_url: str = "",
) -> dict[str, Any]:
    """Persist one message and return its serialized record.

    Raises ``User.DoesNotExist`` when either participant is unknown and lets
    database errors propagate to the caller.
    """

    sender = User.objects.get(pk=sender_id)
    receiver = User.objects.get(pk=receiver_id)
    message = Message.objects.create(
        sender=sender,
        receiver=receiver,
        content=content,
        message_type=message_type,
        file_url=file_url,
    )
    return dict(MessageSerializer(message).data)


def project_user(user_id: Any) -> dict[str, Any] | None:
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        return None
    return dict(UserSummarySerializer(user).data)


asave_message = database_sync_to_async(save_message)
aproject_user = database_sync_to_async(project_user)
