from __future__ import annotations

from django.contrib.auth import get_user_model

User = get_user_model()

TEST_PASSWORD = "TestPass123!"  # noqa: S105


def make_user(username: str, **extra) -> User:
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password=TEST_PASSWORD,
        **extra,
    )
