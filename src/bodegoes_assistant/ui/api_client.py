"""Synchronous HTTP client the Streamlit UI uses to talk to the backend."""

from __future__ import annotations

from typing import Any

import httpx

_TIMEOUT_SECONDS = 60


class RestaurantApiClient:
    """Thin wrapper over the REST API; returns decoded JSON.

    Non-2xx responses raise ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = _TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def create_session(self, name: str) -> dict[str, Any]:
        return self._request("POST", "/api/chat/session", json={"name": name})

    def get_messages(self, session_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/api/chat/session/{session_id}/messages")

    def send_message(self, session_id: int, content: str) -> dict[str, Any]:
        """Post a message; returns ``{"userMessage": ..., "assistantMessage": ...}``."""
        return self._request(
            "POST",
            "/api/chat/message",
            json={"sessionId": session_id, "content": content},
        )

    def get_restaurant_info(self) -> dict[str, Any]:
        return self._request("GET", "/api/restaurant/info")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._client.request(method, path, **kwargs)
        response.raise_for_status()
        return response.json()
