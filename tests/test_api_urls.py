from http import HTTPStatus

import pytest
from django.urls import resolve
from django.urls import reverse


def test_conversation_routes():
    assert reverse("api_v1:conversation", kwargs={"user_id": 3}) == "/api/v1/messages/3/"
    assert resolve("/api/v1/messages/3/").view_name == "api_v1:conversation"
    assert (
        reverse("api_v1:conversation-read", kwargs={"user_id": 3})
        == "/api/v1/messages/3/read/"
    )


def test_schema_docs_available_under_v1():
    assert resolve("/api/v1/schema/").view_name == "api-schema-v1"
    assert resolve("/api/v1/docs/").view_name == "api-docs-v1"


def test_api_v1_docs_accessible_by_admin(admin_client):
    response = admin_client.get(reverse("api-docs-v1"))
    assert response.status_code == HTTPStatus.OK


@pytest.mark.django_db
def test_api_v1_docs_not_accessible_by_anonymous_users(client):
    response = client.get(reverse("api-docs-v1"))
    assert response.status_code == HTTPStatus.FORBIDDEN


def test_api_v1_schema_groups_messages_tag(admin_client):
    response = admin_client.get(reverse("api-schema-v1"), {"format": "json"})
    assert response.status_code == HTTPStatus.OK
    schema = response.json()
    ops = schema["paths"]["/api/v1/messages/{user_id}/"]
    assert ops["get"]["tags"] == ["Messages"]
