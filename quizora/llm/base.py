"""
Chat service interface. Implementations turn a user message plus recent history into one reply.
"""
from typing import Protocol


class ChatTurnLike(Protocol):
    role: str

    @property
    def text(self) -> str: ...


class ChatService(Protocol):
    """Abstract interface for the in-app chat helper."""

    def reply(self, message: str, history: list[ChatTurnLike]) -> str:
        """Return the generated reply text. Raises on any downstream failure."""
        ...
