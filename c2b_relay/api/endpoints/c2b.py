import logging
from typing import Union

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from c2b_relay.error_handler import BindError, PhoneValidationError
from c2b_relay.integrations.clients.mocks.mpesa import MockMpesaC2BClient
from c2b_relay.integrations.clients.real_http.mpesa import RealMpesaC2BClient
from c2b_relay.integrations.contracts.c2b import PushRequest
from c2b_relay.validation import InvalidPhoneNumber, normalize_msisdn

logger = logging.getLogger(__name__)

api = APIRouter()
c2b_api = api

C2BClient = Union[RealMpesaC2BClient, MockMpesaC2BClient]


def get_c2b_client(request: Request) -> C2BClient:
    return request.app.state.c2b_client


async def preformat_push(request: Request) -> PushRequest:
    """Bind the JSON body and normalize its phone number.

    Runs before the endpoint; the first failure ends the request.
    """
    body = await request.body()
    try:
        push = PushRequest.model_validate_json(body)
    except ValidationError as e:
        logger.warning("C2B request binding failed: %s", e.errors(include_url=False))
        raise BindError() from e

    try:
        msisdn = normalize_msisdn(push.phone)
    except InvalidPhoneNumber as e:
        logger.warning("Rejected phone number %r: %s", push.phone, e.detail)
        raise PhoneValidationError(push.phone, e.detail) from e

    return push.model_copy(update={"phone": msisdn})


@api.post("/c2b", status_code=202, tags=["C2B"])
async def c2b(
    push: PushRequest = Depends(preformat_push),
    client: C2BClient = Depends(get_c2b_client),
):
    body = await client.simulate(push)
    return {"message": body}
