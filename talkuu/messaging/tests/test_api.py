import pytest
from rest_framework import status
from rest_framework.test import APIClient

from talkuu.messaging.models import Message
from talkuu.users.tests.factories import make_user


@pytest.mark.django_db
class TestConversationAPI:
    @pytest.fixture(autouse=True)
    def _setup(self, user, friend):
        self.client = APIClient()
        self.user = user
        self.friend = friend
        self.stranger = make_user("stranger")
        self.client.force_authenticate(user=self.user)

        Message.objects.create(sender=user, receiver=friend, content="first")
        Message.objects.create(sender=friend, receiver=user, content="second")
        Message.objects.create(sender=friend, receiver=user, content="third")
        Message.objects.create(sender=self.stranger, receiver=user, content="other")

    def test_requires_authentication(self):
        res = APIClient().get(f"/api/v1/messages/{self.friend.pk}/")
        assert res.status_code in {
            status.HTTP_401_UNAUTHORIZED,
            status.HTTP_403_FORBIDDEN,
        }

    def test_lists_conversation_oldest_first(self):
        res = self.client.get(f"/api/v1/messages/{self.friend.pk}/")

        assert res.status_code == status.HTTP_200_OK
        assert [m["content"] for m in res.data] == ["first", "second", "third"]

    def test_messages_are_enriched(self):
        res = self.client.get(f"/api/v1/messages/{self.friend.pk}/")

        first = res.data[0]
        assert first["sender"]["firstName"] == "Sam"
        assert first["receiver"]["firstName"] == "Rae"
        assert first["messageType"] == "text"
        assert first["isRead"] is False

    def test_unknown_user_is_404(self):
        res = self.client.get("/api/v1/messages/424242/")
        assert res.status_code == status.HTTP_404_NOT_FOUND

    def test_mark_read_only_touches_incoming_from_partner(self):
        res = self.client.post(f"/api/v1/messages/{self.friend.pk}/read/")

        assert res.status_code == status.HTTP_200_OK
        assert res.data == {"updated": 2}
        assert Message.objects.filter(is_read=True).count() == 2
        assert not Message.objects.get(content="first").is_read
        assert not Message.objects.get(content="other").is_read

    def test_mark_read_is_idempotent(self):
        self.client.post(f"/api/v1/messages/{self.friend.pk}/read/")
        res = self.client.post(f"/api/v1/messages/{self.friend.pk}/read/")

        assert res.data == {"updated": 0}
