from http import HTTPStatus

import pytest
from django.db import OperationalError
from django.db import connection as dj_conn

from talkuu.realtime.socketio import presence


def test_index_needs_no_database(client):
    resp = client.get("/")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"message": "Talkuu API is running!"}


@pytest.mark.django_db
def test_health_ok(client):
    presence.clear()
    presence.join("1", "c1")
    try:
        resp = client.get("/health/")
    finally:
        presence.clear()
    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert data["status"] == "ok"
    assert data["components"]["db"]["ok"] is True
    assert data["components"]["realtime"] == {"ok": True, "online_users": 1}


@pytest.mark.django_db
def test_health_degraded_when_db_fails(client, monkeypatch):
    msg = "db down"  # EM101/TRY003: assign message to a variable

    def raise_cursor():
        raise OperationalError(msg)

    monkeypatch.setattr(dj_conn, "cursor", raise_cursor, raising=True)
    resp = client.get("/health/")
    assert resp.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    data = resp.json()
    assert data["status"] == "degraded"
    assert data["components"]["db"] == {"ok": False, "error": "db down"}
