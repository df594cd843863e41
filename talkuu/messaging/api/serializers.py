from __future__ import annotations

from rest_framework import serializers

from talkuu.messaging.models import Message
from talkuu.users.api.serializers import UserSummarySerializer


class MessageSerializer(serializers.ModelSerializer[Message]):
    """Stored message record; participants are plain ids.

    Field names follow the camelCase shape the frontend already consumes.
    """

    messageType = serializers.CharField(source="message_type", read_only=True)  # noqa: N815
    fileUrl = serializers.CharField(source="file_url", read_only=True)  # noqa: N815
    isRead = serializers.BooleanField(source="is_read", read_only=True)  # noqa: N815
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)  # noqa: N815
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)  # noqa: N815

    class Meta:
        model = Message
        fields = [
            "id",
            "sender",
            "receiver",
            "content",
            "messageType",
            "fileUrl",
            "isRead",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "sender", "receiver", "content"]


class EnrichedMessageSerializer(MessageSerializer):
    """Message with sender/receiver profile projections instead of ids."""

    sender = UserSummarySerializer(read_only=True)
    receiver = UserSummarySerializer(read_only=True)


class MarkReadResultSerializer(serializers.Serializer):
    updated = serializers.IntegerField()
