import pytest

from talkuu.messaging.models import Message
from talkuu.messaging.store import project_user
from talkuu.messaging.store import save_message
from talkuu.users.models import User


@pytest.mark.django_db
class TestSaveMessage:
    def test_persists_and_returns_record(self, user, friend):
        record = save_message(
            sender_id=str(user.pk),
            receiver_id=friend.pk,
            content="hi",
        )

        message = Message.objects.get()
        assert record["id"] == message.pk
        assert record["sender"] == user.pk
        assert record["receiver"] == friend.pk
        assert record["content"] == "hi"
        assert record["messageType"] == Message.Type.TEXT
        assert record["fileUrl"] == ""
        assert record["isRead"] is False
        assert record["createdAt"]

    def test_attachment_fields(self, user, friend):
        save_message(
            sender_id=user.pk,
            receiver_id=friend.pk,
            content="doc",
            message_type=Message.Type.FILE,
            file_url="https://media.example.com/doc.pdf",
        )

        message = Message.objects.get()
        assert message.message_type == "file"
        assert message.file_url == "https://media.example.com/doc.pdf"

    def test_unknown_receiver_raises(self, user):
        with pytest.raises(User.DoesNotExist):
            save_message(sender_id=user.pk, receiver_id=424242, content="hi")
        assert not Message.objects.exists()


@pytest.mark.django_db
class TestProjectUser:
    def test_projection_fields(self, user):
        assert project_user(user.pk) == {
            "id": user.pk,
            "firstName": "Sam",
            "lastName": "Sender",
            "profilePicture": "https://media.example.com/sam.png",
        }

    def test_accepts_string_ids(self, friend):
        assert project_user(str(friend.pk))["lastName"] == "Receiver"

    def test_unknown_user_is_absent(self):
        assert project_user(424242) is None
