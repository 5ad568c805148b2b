"""Tests for RestaurantInfoService and the per-field merge."""

from __future__ import annotations

import copy

import pytest

from bodegoes_assistant.application.exceptions import ProviderError
from bodegoes_assistant.application.use_cases.restaurant_info import (
    FALLBACK_INFO,
    WEEKDAYS,
    RestaurantInfoService,
    merge_place_details,
)

PLACE = {
    "name": "Bodegoes Downtown",
    "formatted_address": "9 Harbour Rd, Old Town",
    "formatted_phone_number": "(555) 010-2030",
    "website": "https://bodegoes.example",
    "rating": 4.8,
    "user_ratings_total": 1200,
    "opening_hours": {
        "weekday_text": [
            "Monday: 10:00 AM – 9:00 PM",
            "Tuesday: 10:00 AM – 9:00 PM",
            "Wednesday: 10:00 AM – 9:00 PM",
            "Thursday: 10:00 AM – 10:00 PM",
            "Friday: 10:00 AM – 11:00 PM",
            "Saturday: 9:00 AM – 11:00 PM",
            "Sunday: Closed",
        ]
    },
    "current_opening_hours": {"open_now": False},
}


class FakePlaces:
    def __init__(self, place=None, error: Exception | None = None) -> None:
        self.place = place
        self.error = error
        self.requested: list[str] = []

    async def fetch_place_details(self, place_id: str):
        self.requested.append(place_id)
        if self.error:
            raise self.error
        return copy.deepcopy(self.place)


class TestGetInfo:
    async def test_provider_failure_returns_fallback(self):
        service = RestaurantInfoService(FakePlaces(error=ProviderError("REQUEST_DENIED")), "pid")

        info = await service.get_info()

        assert info.is_open is True
        assert info.rating == 4.5
        assert info.reviews == 324
        assert set(info.hours) == set(WEEKDAYS)
        assert info == FALLBACK_INFO

    async def test_fallback_copy_is_independent(self):
        service = RestaurantInfoService(FakePlaces(error=ProviderError("boom")), "pid")

        info = await service.get_info()
        info.hours["Monday"] = "Closed"

        assert FALLBACK_INFO.hours["Monday"] == "11:00 AM - 10:00 PM"

    async def test_live_data_mapped(self):
        places = FakePlaces(PLACE)
        service = RestaurantInfoService(places, "ChIJ-test")

        info = await service.get_info()

        assert places.requested == ["ChIJ-test"]
        assert info.name == "Bodegoes Downtown"
        assert info.address == "9 Harbour Rd, Old Town"
        assert info.phone == "(555) 010-2030"
        assert info.website == "https://bodegoes.example"
        assert info.rating == 4.8
        assert info.reviews == 1200
        assert info.hours["Thursday"] == "10:00 AM – 10:00 PM"
        assert info.hours["Sunday"] == "Closed"
        assert info.is_open is False
        assert info.current_status == "Closed"

    async def test_every_call_queries_provider(self):
        places = FakePlaces(PLACE)
        service = RestaurantInfoService(places, "pid")

        await service.get_info()
        await service.get_info()

        assert places.requested == ["pid", "pid"]


class TestMergePlaceDetails:
    def test_missing_rating_only(self):
        place = {k: v for k, v in PLACE.items() if k != "rating"}

        info = merge_place_details(place, copy.deepcopy(FALLBACK_INFO))

        assert info.rating == FALLBACK_INFO.rating
        assert info.name == PLACE["name"]
        assert info.address == PLACE["formatted_address"]
        assert info.phone == PLACE["formatted_phone_number"]
        assert info.website == PLACE["website"]
        assert info.reviews == PLACE["user_ratings_total"]
        assert info.is_open is False
        assert info.current_status == "Closed"
        assert info.hours == {
            "Monday": "10:00 AM – 9:00 PM",
            "Tuesday": "10:00 AM – 9:00 PM",
            "Wednesday": "10:00 AM – 9:00 PM",
            "Thursday": "10:00 AM – 10:00 PM",
            "Friday": "10:00 AM – 11:00 PM",
            "Saturday": "9:00 AM – 11:00 PM",
            "Sunday": "Closed",
        }

    def test_empty_result_is_all_fallback(self):
        assert merge_place_details({}, copy.deepcopy(FALLBACK_INFO)) == FALLBACK_INFO

    @pytest.mark.parametrize(
        ("key", "bad_value", "attr"),
        [
            ("name", "", "name"),
            ("website", None, "website"),
            ("rating", "4.9", "rating"),
            ("rating", True, "rating"),
            ("user_ratings_total", 12.5, "reviews"),
        ],
    )
    def test_mistyped_field_falls_back(self, key, bad_value, attr):
        place = {**PLACE, key: bad_value}
        info = merge_place_details(place, copy.deepcopy(FALLBACK_INFO))
        assert getattr(info, attr) == getattr(FALLBACK_INFO, attr)

    def test_integer_rating_accepted(self):
        info = merge_place_details({**PLACE, "rating": 5}, copy.deepcopy(FALLBACK_INFO))
        assert info.rating == 5.0

    def test_hours_without_weekday_text_fall_back(self):
        place = {**PLACE, "opening_hours": {"open_now": True}}
        info = merge_place_details(place, copy.deepcopy(FALLBACK_INFO))
        assert info.hours == FALLBACK_INFO.hours

    def test_malformed_hour_lines_skipped(self):
        place = {**PLACE, "opening_hours": {"weekday_text": ["Monday: 9 AM – 5 PM", 42, "junk"]}}
        info = merge_place_details(place, copy.deepcopy(FALLBACK_INFO))
        assert info.hours == {"Monday": "9 AM – 5 PM"}

    def test_missing_open_now_keeps_fallback_status(self):
        place = {k: v for k, v in PLACE.items() if k != "current_opening_hours"}
        info = merge_place_details(place, copy.deepcopy(FALLBACK_INFO))
        assert info.is_open is True
        assert info.current_status == "Open"

    def test_open_now_true(self):
        place = {**PLACE, "current_opening_hours": {"open_now": True}}
        info = merge_place_details(place, copy.deepcopy(FALLBACK_INFO))
        assert (info.is_open, info.current_status) == (True, "Open")
