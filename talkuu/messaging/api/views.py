from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from talkuu.messaging.models import Message

from .serializers import EnrichedMessageSerializer
from .serializers import MarkReadResultSerializer

User = get_user_model()


@extend_schema_view(get=extend_schema(tags=["Messages"]))
class ConversationView(ListAPIView):
    """Messages exchanged between request.user and ``user_id``, oldest first.

    This is the history the client reloads from when a realtime delivery was
    missed; the Socket.IO flow never reads from it.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = EnrichedMessageSerializer
    pagination_class = None

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Message.objects.none()
        other = get_object_or_404(User, pk=self.kwargs["user_id"])
        me = self.request.user
        return (
            Message.objects.filter(
                Q(sender=me, receiver=other) | Q(sender=other, receiver=me),
            )
            .select_related("sender", "receiver")
            .order_by("created_at", "id")
        )


@extend_schema_view(
    post=extend_schema(tags=["Messages"], request=None, responses=MarkReadResultSerializer),
)
class ConversationReadView(APIView):
    """Mark every unread message from ``user_id`` to request.user as read."""

    permission_classes = [IsAuthenticated]

    def post(self, request, user_id: int):
        other = get_object_or_404(User, pk=user_id)
        updated = Message.objects.filter(
            sender=other,
            receiver=request.user,
            is_read=False,
        ).update(is_read=True)
        return Response({"updated": updated}, status=status.HTTP_200_OK)
