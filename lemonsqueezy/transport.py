"""Sends requests to the API and wraps the answers."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from .response import Response

JSON_API_MEDIA_TYPE = "application/vnd.api+json"


class Transport:
    """Performs authenticated JSON:API requests against a base URL."""

    def __init__(
        self, base_url: str, api_key: str = "", http_client: Optional[httpx.Client] = None
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._owns_client = http_client is None
        self._http = httpx.Client() if http_client is None else http_client

    def request(self, method: str, path: str, payload: Any = None) -> Response:
        """Send a request; raise ApiError when the status is not a success."""
        headers = {
            "Accept": JSON_API_MEDIA_TYPE,
            "Content-Type": JSON_API_MEDIA_TYPE,
            "Authorization": f"Bearer {self.api_key}",
        }
        content = None if payload is None else json.dumps(payload).encode("utf-8")
        raw = self._http.request(method, self.base_url + path, headers=headers, content=content)
        return Response(raw.status_code, raw.content, dict(raw.headers)).raise_for_status()

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()