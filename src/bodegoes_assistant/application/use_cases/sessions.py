"""Session use case — opening chat sessions and reading their history."""

from __future__ import annotations

from bodegoes_assistant.application.exceptions import ValidationError
from bodegoes_assistant.domain.models import ChatSession, Message
from bodegoes_assistant.domain.protocols import IChatStore


class SessionService:
    """Stateless operations over the chat store for session lifecycle."""

    def __init__(self, store: IChatStore) -> None:
        self.store = store

    def create_session(self, display_name: str) -> ChatSession:
        """Open a new session for *display_name* (surrounding whitespace trimmed).

        Raises:
            ValidationError: If the name is empty after trimming.
        """
        name = _clean_name(display_name)
        return self.store.create_chat_session(name)

    def get_session(self, session_id: int) -> ChatSession | None:
        return self.store.get_chat_session(session_id)

    def list_messages(self, session_id: int) -> list[Message]:
        """Return the session's messages oldest first; ``[]`` for unknown sessions."""
        return self.store.get_messages_by_session(session_id)

    def sessions_for(self, display_name: str) -> list[ChatSession]:
        """Return every session opened under *display_name*."""
        return self.store.get_sessions_by_name(_clean_name(display_name))


def _clean_name(display_name: str | None) -> str:
    name = (display_name or "").strip()
    if not name:
        raise ValidationError("Name must not be empty")
    return name
