import pytest

from talkuu.users.models import User
from talkuu.users.tests.factories import make_user


@pytest.fixture
def user(db) -> User:
    return make_user(
        "sender",
        first_name="Sam",
        last_name="Sender",
        profile_picture="https://media.example.com/sam.png",
    )


@pytest.fixture
def friend(db) -> User:
    return make_user("receiver", first_name="Rae", last_name="Receiver")


@pytest.fixture(autouse=True)
def _clear_presence():
    from talkuu.realtime.socketio import presence  # noqa: PLC0415

    presence.clear()
    yield
    presence.clear()
