import pytest

from talkuu.users.models import User
from talkuu.users.tests.factories import make_user


@pytest.mark.django_db
def test_full_name_and_str(user: User):
    assert user.full_name == "Sam Sender"
    assert str(user) == "Sam Sender"


@pytest.mark.django_db
def test_str_falls_back_to_username():
    bare = make_user("bare")
    assert bare.full_name == ""
    assert str(bare) == "bare"
    assert bare.profile_picture == ""
