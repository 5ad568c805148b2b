"""Tests for GooglePlacesClient using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from bodegoes_assistant.application.exceptions import ProviderError
from bodegoes_assistant.infrastructure.places_client import PLACE_FIELDS, GooglePlacesClient


def _client(handler) -> GooglePlacesClient:
    return GooglePlacesClient(api_key="k-123", transport=httpx.MockTransport(handler))


async def test_returns_result_and_sends_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": "OK", "result": {"name": "Bodegoes"}})

    place = await _client(handler).fetch_place_details("ChIJ-abc")

    assert place == {"name": "Bodegoes"}
    params = seen[0].url.params
    assert params["place_id"] == "ChIJ-abc"
    assert params["key"] == "k-123"
    assert params["fields"].split(",") == list(PLACE_FIELDS)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"status": "UNKNOWN_ERROR"}),
        httpx.Response(200, json={"status": "REQUEST_DENIED", "error_message": "bad key"}),
        httpx.Response(200, json={"status": "OK"}),
        httpx.Response(200, json={"status": "OK", "result": []}),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, text="<html>oops</html>"),
    ],
)
async def test_bad_responses_raise_provider_error(response: httpx.Response):
    with pytest.raises(ProviderError):
        await _client(lambda request: response).fetch_place_details("pid")


async def test_transport_error_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError):
        await _client(handler).fetch_place_details("pid")
