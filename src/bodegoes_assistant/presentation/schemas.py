"""HTTP request/response schemas (Pydantic models) for the REST API.

JSON keys are camelCase on the wire; snake_case is accepted on input too.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bodegoes_assistant.domain.models import ChatSession, Message, RestaurantInfo


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class CreateSessionRequest(CamelModel):
    """Request body for POST /api/chat/session."""

    name: str = Field(
        validation_alias=AliasChoices("name", "username"),
        description="Visitor display name",
    )


class ChatSessionResponse(CamelModel):
    id: int
    name: str
    created_at: datetime

    @classmethod
    def from_domain(cls, session: ChatSession) -> ChatSessionResponse:
        return cls(id=session.id, name=session.name, created_at=session.created_at)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class SendMessageRequest(CamelModel):
    """Request body for POST /api/chat/message."""

    session_id: int = Field(description="Session the message belongs to")
    content: str = Field(description="The visitor's message text")


class MessageResponse(CamelModel):
    """A single persisted message."""

    id: int
    session_id: int
    content: str
    is_assistant: bool
    timestamp: datetime

    @classmethod
    def from_domain(cls, message: Message) -> MessageResponse:
        return cls(
            id=message.id,
            session_id=message.session_id,
            content=message.content,
            is_assistant=message.is_assistant,
            timestamp=message.timestamp,
        )


class SendMessageResponse(CamelModel):
    """Response from POST /api/chat/message."""

    user_message: MessageResponse
    assistant_message: MessageResponse


# ---------------------------------------------------------------------------
# Restaurant info
# ---------------------------------------------------------------------------


class RestaurantInfoResponse(CamelModel):
    name: str
    address: str
    phone: str
    website: str
    rating: float
    reviews: int
    hours: dict[str, str]
    is_open: bool
    current_status: str

    @classmethod
    def from_domain(cls, info: RestaurantInfo) -> RestaurantInfoResponse:
        return cls(
            name=info.name,
            address=info.address,
            phone=info.phone,
            website=info.website,
            rating=info.rating,
            reviews=info.reviews,
            hours=info.hours,
            is_open=info.is_open,
            current_status=info.current_status,
        )
