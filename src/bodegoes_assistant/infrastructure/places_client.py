"""Google Places Details client."""

from __future__ import annotations

from typing import Any

import httpx

from bodegoes_assistant.application.exceptions import ProviderError

PLACE_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
PLACE_FIELDS = (
    "name",
    "formatted_address",
    "formatted_phone_number",
    "website",
    "rating",
    "user_ratings_total",
    "opening_hours",
    "current_opening_hours",
)


class GooglePlacesClient:
    """Fetches place details for a single place ID.

    A fresh ``httpx.AsyncClient`` is used per call; *transport* lets tests
    plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def fetch_place_details(self, place_id: str) -> dict[str, Any]:
        """Return the ``result`` object of a place-details lookup.

        Raises:
            ProviderError: On transport errors, HTTP errors, a non-``OK``
                API status, or a response without a ``result`` object.
        """
        params = {
            "place_id": place_id,
            "fields": ",".join(PLACE_FIELDS),
            "key": self._api_key,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(PLACE_DETAILS_URL, params=params)
        except httpx.HTTPError as exc:
            raise ProviderError(f"Places request failed: {exc}") from exc

        if response.status_code >= 400:
            raise ProviderError(f"HTTP {response.status_code} from Places API")

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("Places API returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise ProviderError("Places API returned an unexpected payload")

        status = data.get("status")
        if status != "OK":
            raise ProviderError(f"Places API error: {status}")

        place = data.get("result")
        if not isinstance(place, dict):
            raise ProviderError("Places API response has no result")
        return place
