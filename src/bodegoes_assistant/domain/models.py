"""Domain entities and value objects.

These are the core data structures of the restaurant assistant domain,
independent of any infrastructure or framework concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# ---------------------------------------------------------------------------
# Chat domain entities (persisted in the chat DB)
# ---------------------------------------------------------------------------


@dataclass
class User:
    id: int
    username: str
    credential: str


@dataclass
class ChatSession:
    id: int
    name: str
    created_at: datetime


@dataclass
class Message:
    id: int
    session_id: int
    content: str
    is_assistant: bool
    timestamp: datetime


@dataclass
class AssistantReply:
    """The two records written by a single chat turn."""

    user_message: Message
    assistant_message: Message


# ---------------------------------------------------------------------------
# Restaurant read model (never persisted)
# ---------------------------------------------------------------------------


@dataclass
class RestaurantInfo:
    name: str
    address: str
    phone: str
    website: str
    rating: float
    reviews: int
    hours: dict[str, str] = field(default_factory=dict)
    is_open: bool = True
    current_status: str = "Open"
