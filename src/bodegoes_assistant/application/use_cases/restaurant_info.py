"""Restaurant info use case — live place details with static fallback.

The info panel must always render, so this use case never raises on
provider trouble:

- a failed lookup (network, HTTP status, API status, missing ``result``)
  yields a copy of ``FALLBACK_INFO``;
- a successful lookup with missing or mistyped attributes keeps every
  good attribute and takes the fallback value for each bad one.

Nothing is cached; every call hits the provider again.
"""

from __future__ import annotations

import copy
from typing import Any

from loguru import logger

from bodegoes_assistant.application.exceptions import ProviderError
from bodegoes_assistant.domain.models import RestaurantInfo
from bodegoes_assistant.domain.protocols import IPlacesProvider

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

FALLBACK_INFO = RestaurantInfo(
    name="Bodegoes",
    address="123 Mediterranean St, Downtown",
    phone="(123) 456-7890",
    website="bodegoes.com",
    rating=4.5,
    reviews=324,
    hours={
        "Monday": "11:00 AM - 10:00 PM",
        "Tuesday": "11:00 AM - 10:00 PM",
        "Wednesday": "11:00 AM - 10:00 PM",
        "Thursday": "11:00 AM - 11:00 PM",
        "Friday": "11:00 AM - 11:00 PM",
        "Saturday": "12:00 PM - 11:00 PM",
        "Sunday": "12:00 PM - 9:00 PM",
    },
    is_open=True,
    current_status="Open",
)


def fallback_info() -> RestaurantInfo:
    """Return a fresh copy of the fallback record."""
    return copy.deepcopy(FALLBACK_INFO)


class RestaurantInfoService:
    """Builds the restaurant info panel from the places provider."""

    def __init__(self, places: IPlacesProvider, place_id: str) -> None:
        self.places = places
        self.place_id = place_id

    async def get_info(self) -> RestaurantInfo:
        try:
            place = await self.places.fetch_place_details(self.place_id)
        except ProviderError as exc:
            logger.warning("Places lookup failed, serving fallback info: {}", exc)
            return fallback_info()
        return merge_place_details(place, fallback_info())


# ---------------------------------------------------------------------------
# Per-field merge
# ---------------------------------------------------------------------------


def merge_place_details(place: dict[str, Any], fallback: RestaurantInfo) -> RestaurantInfo:
    """Map a place-details ``result`` onto ``RestaurantInfo``.

    Each attribute is taken from *place* when present and well-typed,
    otherwise from *fallback*.
    """
    is_open = _open_now(place)
    if is_open is None:
        is_open = fallback.is_open
        current_status = fallback.current_status
    else:
        current_status = "Open" if is_open else "Closed"

    return RestaurantInfo(
        name=_text(place.get("name"), fallback.name),
        address=_text(place.get("formatted_address"), fallback.address),
        phone=_text(place.get("formatted_phone_number"), fallback.phone),
        website=_text(place.get("website"), fallback.website),
        rating=_rating(place.get("rating"), fallback.rating),
        reviews=_count(place.get("user_ratings_total"), fallback.reviews),
        hours=_weekly_hours(place.get("opening_hours")) or dict(fallback.hours),
        is_open=is_open,
        current_status=current_status,
    )


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _rating(value: Any, default: float) -> float:
    # bool is an int subclass; a stray True must not become a 1.0 rating
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def _count(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _weekly_hours(opening_hours: Any) -> dict[str, str]:
    """Parse ``weekday_text`` lines such as ``"Monday: 11:00 AM – 10:00 PM"``."""
    if not isinstance(opening_hours, dict):
        return {}
    weekday_text = opening_hours.get("weekday_text")
    if not isinstance(weekday_text, list):
        return {}

    hours: dict[str, str] = {}
    for line in weekday_text:
        if not isinstance(line, str) or ": " not in line:
            continue
        day, span = line.split(": ", 1)
        hours[day.strip()] = span.strip()
    return hours


def _open_now(place: dict[str, Any]) -> bool | None:
    current = place.get("current_opening_hours")
    if not isinstance(current, dict):
        return None
    open_now = current.get("open_now")
    return open_now if isinstance(open_now, bool) else None
