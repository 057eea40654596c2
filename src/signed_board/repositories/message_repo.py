"""Storage for messages whose signatures have been verified."""
from __future__ import annotations

from threading import Lock
from typing import Protocol

from signed_board.schemas.message import SignedMessage

__all__ = ["InMemoryMessageStore", "MessageStore", "get_message_store"]


class MessageStore(Protocol):
    """Interface the HTTP layer uses to record and list accepted messages."""

    def append(self, signed_message: SignedMessage) -> int:
        """Record an accepted message and return the new number of messages."""
        ...

    def list_all(self) -> list[SignedMessage]:
        """Return every accepted message, oldest first."""
        ...

    def __len__(self) -> int: ...


class InMemoryMessageStore:
    """Process-local message list guarded by a lock.

    Readers receive a copy, so callers never observe a list that is being
    appended to.
    """

    def __init__(self) -> None:
        self._messages: list[SignedMessage] = []
        self._lock = Lock()

    def append(self, signed_message: SignedMessage) -> int:
        with self._lock:
            self._messages.append(signed_message)
            return len(self._messages)

    def list_all(self) -> list[SignedMessage]:
        with self._lock:
            return list(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


_STORE = InMemoryMessageStore()


def get_message_store() -> MessageStore:
    """Return the process-wide message store."""
    return _STORE
