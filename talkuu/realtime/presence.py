"""In-memory presence: which Socket.IO connection currently speaks for a user.

Mutations and lookups never await, so on a single event loop they cannot
interleave with each other and need no lock. State lives for the process
lifetime only.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def normalize_user_id(user_id: Any) -> str | None:
    """Registry key for a client-supplied user identity.

    Clients send ids as integers or strings; both map to the same key.
    Anything else, and a falsy id, has no key.
    """

    if isinstance(user_id, bool) or not isinstance(user_id, (str, int)):
        return None
    if not user_id:
        return None
    key = str(user_id).strip()
    return key or None


class PresenceRegistry:
    """Bidirectional user <-> connection map. Last join wins per user."""

    def __init__(self) -> None:
        self._connection_by_user: dict[str, str] = {}
        self._user_by_connection: dict[str, str] = {}

    def join(self, user_id: Any, connection_id: str) -> str:
        key = normalize_user_id(user_id)
        if key is None:
            msg = "user_id is required to join"
            raise ValueError(msg)

        previous = self._user_by_connection.get(connection_id)
        if previous is not None and previous != key:
            # Same socket re-identifying as someone else.
            self._release(previous, connection_id)

        self._connection_by_user[key] = connection_id
        self._user_by_connection[connection_id] = key
        return key

    def lookup_connection(self, user_id: Any) -> str | None:
        key = normalize_user_id(user_id)
        if key is None:
            return None
        return self._connection_by_user.get(key)

    def lookup_user(self, connection_id: str) -> str | None:
        return self._user_by_connection.get(connection_id)

    def remove(self, connection_id: str) -> str | None:
        """Forget ``connection_id``; returns the user it belonged to, if any."""

        user_id = self._user_by_connection.pop(connection_id, None)
        if user_id is not None:
            self._release(user_id, connection_id)
        return user_id

    def online_users(self) -> list[str]:
        return list(self._connection_by_user)

    def clear(self) -> None:
        self._connection_by_user.clear()
        self._user_by_connection.clear()

    def _release(self, user_id: str, connection_id: str) -> None:
        # A newer join may already own this user; only drop our own entry.
        if self._connection_by_user.get(user_id) == connection_id:
            del self._connection_by_user[user_id]
        else:
            logger.debug(
                "Keeping newer connection for user %s (stale %s)",
                user_id,
                connection_id,
            )

    def __contains__(self, user_id: object) -> bool:
        return self.lookup_connection(user_id) is not None

    def __len__(self) -> int:
        return len(self._connection_by_user)
