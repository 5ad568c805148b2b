"""Domain service interfaces (ports).

These protocols define the contracts that infrastructure implementations
must satisfy.  The application layer depends on these abstractions,
not on concrete classes.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from bodegoes_assistant.domain.models import ChatSession, Message, User

# ---------------------------------------------------------------------------
# Chat persistence
# ---------------------------------------------------------------------------


@runtime_checkable
class IChatStore(Protocol):
    """Interface for user / session / message persistence.

    Implementations: SQLiteChatStore.
    """

    def connect(self) -> None: ...

    def close(self) -> None: ...

    def create_user(self, username: str, credential: str) -> User: ...

    def get_user(self, user_id: int) -> User | None: ...

    def get_user_by_name(self, username: str) -> User | None: ...

    def create_chat_session(self, name: str) -> ChatSession: ...

    def get_chat_session(self, session_id: int) -> ChatSession | None: ...

    def get_sessions_by_name(self, name: str) -> list[ChatSession]: ...

    def create_message(
        self, session_id: int, content: str, is_assistant: bool = False
    ) -> Message: ...

    def get_messages_by_session(self, session_id: int) -> list[Message]: ...


# ---------------------------------------------------------------------------
# External providers
# ---------------------------------------------------------------------------


@runtime_checkable
class ICompletionProvider(Protocol):
    """Interface for the text-completion provider.

    ``complete`` receives a single user turn; the system instruction is
    owned by the implementation.  Failures raise ``ProviderError``.

    Implementations: AssistantAgentClient (pydantic-ai + OpenAI).
    """

    async def complete(self, prompt: str) -> str: ...


@runtime_checkable
class IPlacesProvider(Protocol):
    """Interface for the place-lookup provider.

    Returns the raw ``result`` object of a place-details lookup.
    Failures raise ``ProviderError``.

    Implementations: GooglePlacesClient.
    """

    async def fetch_place_details(self, place_id: str) -> dict[str, Any]: ...
