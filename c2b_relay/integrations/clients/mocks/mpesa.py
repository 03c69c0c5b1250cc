"""
M-Pesa C2B — MOCK client.

Development stand-in for RealMpesaC2BClient:
- Does NOT make any network calls
- Builds the same C2BRequest the real client would send
- Returns a Daraja-shaped simulate response body

Selected in c2b_relay/api/main.py when no bearer token is configured or
INTEGRATIONS_MODE=mock.
"""

import json
import logging
import uuid
from collections import deque
from typing import Deque

from c2b_relay.integrations.contracts.c2b import C2BRequest, PushRequest
from c2b_relay.utils.config_loader import MpesaConfig

logger = logging.getLogger(__name__)


class MockMpesaC2BClient:
    def __init__(self, config: MpesaConfig, history_size: int = 100):
        self.config = config
        # Most recent requests that would have been sent (reset on restart)
        self.sent: Deque[C2BRequest] = deque(maxlen=history_size)
        logger.info("[MPESA MOCK] Client initialised (short_code=%s)", config.short_code)

    async def simulate(self, push: PushRequest) -> str:
        request = C2BRequest.from_push(push, self.config)
        self.sent.append(request)
        logger.info("[MPESA MOCK] Simulating C2B msisdn=%s amount=%s", request.msisdn, request.amount)

        return json.dumps(
            {
                "OriginatorCoversationID": f"MOCK-{uuid.uuid4().hex[:12].upper()}",
                "ResponseCode": "0",
                "ResponseDescription": "Accept the service request successfully.",
            }
        )

    async def aclose(self) -> None:
        return None
