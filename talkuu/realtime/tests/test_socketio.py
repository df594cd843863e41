from unittest import mock

import pytest
from asgiref.sync import async_to_sync

from talkuu.messaging.models import Message
from talkuu.realtime import socketio as rt


@pytest.fixture
def emitted(monkeypatch):
    emit = mock.AsyncMock()
    monkeypatch.setattr(rt.pipeline, "emit", emit)
    return emit


def _events(emit, name):
    return [c for c in emit.await_args_list if c.args[0] == name]


def test_join_registers_connection():
    ack = async_to_sync(rt.join)("c1", 7)

    assert ack == {"success": True}
    assert rt.presence.lookup_connection("7") == "c1"
    assert rt.presence.lookup_user("c1") == "7"


def test_join_without_user_id_is_rejected():
    ack = async_to_sync(rt.join)("c1")

    assert ack["success"] is False
    assert rt.presence.lookup_user("c1") is None


def test_disconnect_clears_presence():
    async_to_sync(rt.join)("c1", 7)
    async_to_sync(rt.disconnect)("c1")

    assert rt.presence.lookup_connection(7) is None
    assert rt.presence.lookup_user("c1") is None


def test_disconnect_unknown_connection_is_noop():
    async_to_sync(rt.disconnect)("never-joined", "client disconnect")

    assert len(rt.presence) == 0


def test_send_without_join_persists_nothing(emitted):
    ack = async_to_sync(rt.send_message)("c1", {"receiverId": 2, "content": "hi"})

    assert ack["success"] is False
    assert ack["error"] == "not_joined"
    emitted.assert_not_awaited()


@pytest.mark.django_db(transaction=True)
class TestSendMessageEndToEnd:
    def test_receiver_offline(self, user, friend, emitted):
        async_to_sync(rt.join)("c1", user.pk)

        ack = async_to_sync(rt.send_message)(
            "c1",
            {"receiverId": friend.pk, "content": "hi"},
        )

        assert ack["success"] is True
        message = Message.objects.get()
        assert message.sender_id == user.pk
        assert message.receiver_id == friend.pk
        assert message.content == "hi"
        assert _events(emitted, "receiveMessage") == []
        sent = _events(emitted, "messageSent")
        assert len(sent) == 1
        assert sent[0].kwargs["to"] == "c1"
        assert sent[0].args[1]["content"] == "hi"

    def test_receiver_online(self, user, friend, emitted):
        async_to_sync(rt.join)("c1", user.pk)
        async_to_sync(rt.join)("c2", str(friend.pk))

        ack = async_to_sync(rt.send_message)(
            "c1",
            {"receiverId": str(friend.pk), "content": "  hello  "},
        )

        assert ack["success"] is True
        assert Message.objects.get().content == "hello"
        received = _events(emitted, "receiveMessage")
        sent = _events(emitted, "messageSent")
        assert [c.kwargs["to"] for c in received] == ["c2"]
        assert [c.kwargs["to"] for c in sent] == ["c1"]
        assert received[0].args[1] == sent[0].args[1] == ack["message"]

    def test_enriched_message_shape(self, user, friend, emitted):
        async_to_sync(rt.join)("c1", user.pk)

        ack = async_to_sync(rt.send_message)(
            "c1",
            {"receiverId": friend.pk, "content": "hey"},
        )

        message = ack["message"]
        assert message["id"] == Message.objects.get().pk
        assert message["messageType"] == "text"
        assert message["isRead"] is False
        assert message["createdAt"]
        assert message["sender"] == {
            "id": user.pk,
            "firstName": "Sam",
            "lastName": "Sender",
            "profilePicture": "https://media.example.com/sam.png",
        }
        assert message["receiver"]["firstName"] == "Rae"

    def test_unknown_receiver_is_store_error(self, user, emitted):
        async_to_sync(rt.join)("c1", user.pk)

        ack = async_to_sync(rt.send_message)(
            "c1",
            {"receiverId": 999_999, "content": "anyone?"},
        )

        assert ack["success"] is False
        assert ack["error"] == "store_error"
        assert not Message.objects.exists()
        emitted.assert_not_awaited()

    def test_blank_content_is_invalid(self, user, friend, emitted):
        async_to_sync(rt.join)("c1", user.pk)

        ack = async_to_sync(rt.send_message)(
            "c1",
            {"receiverId": friend.pk, "content": "    "},
        )

        assert ack["error"] == "invalid_payload"
        assert not Message.objects.exists()
        emitted.assert_not_awaited()
