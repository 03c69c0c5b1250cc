"""
Real M-Pesa C2B HTTP Client.

Used when a Daraja bearer token is configured. Posts C2B simulate requests
through the AuthenticatedClient and hands the raw response body back.
"""

from __future__ import annotations

import json
import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

from c2b_relay.error_handler import MalformedRequestError, UpstreamReadError, UpstreamTransportError
from c2b_relay.integrations.clients.real_http.authenticated_client import AuthenticatedClient
from c2b_relay.integrations.contracts.c2b import C2BRequest, PushRequest
from c2b_relay.utils.config_loader import MpesaConfig

logger = logging.getLogger(__name__)


class RealMpesaC2BClient:
    def __init__(
        self,
        config: MpesaConfig,
        token: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        parsed = urlparse(config.url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise MalformedRequestError(f"M-Pesa C2B URL must be absolute http(s), got {config.url!r}")

        self.config = config
        self.client = AuthenticatedClient(token, client=http_client, timeout_seconds=config.timeout_seconds)

    async def simulate(self, push: PushRequest) -> str:
        payload = C2BRequest.from_push(push, self.config).to_payload()
        logger.info("Posting C2B request to %s msisdn=%s amount=%s", self.config.url, push.phone, push.amount)

        try:
            response = await self.client.post(self.config.url, json.dumps(payload), stream=True)
        except httpx.RequestError as e:
            logger.error("Request error connecting to M-Pesa C2B API: %s", e)
            raise UpstreamTransportError() from e

        try:
            body = await response.aread()
        except httpx.RequestError as e:
            logger.error("Failed reading M-Pesa C2B response: %s", e)
            raise UpstreamReadError() from e
        finally:
            await response.aclose()

        logger.info("Received M-Pesa C2B response: status=%s", response.status_code)
        return body.decode("utf-8", errors="replace")

    async def aclose(self) -> None:
        await self.client.aclose()
