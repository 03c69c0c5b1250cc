"""
Authenticated HTTP client.

Wraps httpx.AsyncClient so every outbound request carries the static bearer
token and a JSON content type.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import httpx

from c2b_relay.error_handler import MalformedRequestError

logger = logging.getLogger(__name__)


class AuthenticatedClient:
    def __init__(
        self,
        token: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        if not token:
            raise MalformedRequestError("A bearer token is required to build authenticated requests.")
        self.token = token
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def get(self, url: str) -> httpx.Response:
        return await self.send(self._build("GET", url))

    async def post(
        self, url: str, content: Union[str, bytes, None] = None, stream: bool = False
    ) -> httpx.Response:
        return await self.send(self._build("POST", url, content=content), stream=stream)

    async def send(self, request: httpx.Request, stream: bool = False) -> httpx.Response:
        request.headers["Content-Type"] = "application/json"
        request.headers["Authorization"] = f"Bearer {self.token}"
        return await self.client.send(request, stream=stream)

    async def aclose(self) -> None:
        await self.client.aclose()

    def _build(self, method: str, url: str, content: Union[str, bytes, None] = None) -> httpx.Request:
        try:
            return self.client.build_request(method, url, content=content)
        except (httpx.InvalidURL, TypeError) as exc:
            logger.critical("Could not form %s request to %r: %s", method, url, exc)
            raise MalformedRequestError(f"An error occurred forming {method} request") from exc
