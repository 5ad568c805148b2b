"""Use-case layer — business logic decoupled from the HTTP transport."""

from bodegoes_assistant.application.use_cases.assistant import FALLBACK_REPLY, AssistantGateway
from bodegoes_assistant.application.use_cases.restaurant_info import (
    FALLBACK_INFO,
    RestaurantInfoService,
    merge_place_details,
)
from bodegoes_assistant.application.use_cases.sessions import SessionService

__all__ = [
    "FALLBACK_INFO",
    "FALLBACK_REPLY",
    "AssistantGateway",
    "RestaurantInfoService",
    "SessionService",
    "merge_place_details",
]
