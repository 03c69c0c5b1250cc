import json

import httpx
from fastapi.testclient import TestClient

from c2b_relay.api.main import create_app
from c2b_relay.error_handler import MalformedRequestError
from c2b_relay.integrations.clients.mocks.mpesa import MockMpesaC2BClient
from c2b_relay.utils.config_loader import RelayConfig


def test_push_is_normalized_and_relayed(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", json={"phone": "0712345678", "amount": "100"})

    assert response.status_code == 202
    assert response.json() == {"message": "OK"}
    assert upstream.payloads == [
        {
            "ShortCode": 600982,
            "CommandID": "CustomerBuyGoodsOnline",
            "Amount": "100",
            "Msisdn": "254712345678",
            "BillRefNumber": "",
        }
    ]


def test_plus_prefixed_phone_is_sent_without_plus(make_app, upstream):
    client = TestClient(make_app(upstream))

    client.post("/c2b", json={"phone": "+254712345678", "amount": "5"})

    assert upstream.payloads[0]["Msisdn"] == "254712345678"


def test_upstream_json_body_is_relayed_as_string(make_app):
    daraja_body = {"ResponseCode": "0", "ResponseDescription": "Accept the service request successfully."}
    client = TestClient(make_app(lambda request: httpx.Response(200, json=daraja_body)))

    response = client.post("/c2b", json={"phone": "254712345678", "amount": "100"})

    assert response.status_code == 202
    assert json.loads(response.json()["message"]) == daraja_body


def test_invalid_phone_is_rejected_before_upstream(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", json={"phone": "123", "amount": "100"})

    assert response.status_code == 400
    assert "not valid" in response.json()["message"]
    assert response.json()["message"] == (
        "The phonenumber 123 provided is not valid. 123 is less than 10 digits or is empty"
    )
    assert upstream.requests == []


def test_missing_phone_is_treated_as_empty(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", json={"amount": "100"})

    assert response.status_code == 400
    assert "not valid" in response.json()["message"]
    assert upstream.requests == []


def test_malformed_json_is_a_binding_error(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 500
    assert response.json() == {"message": "A binding error occurred, required field: phone"}
    assert upstream.requests == []


def test_non_string_phone_is_a_binding_error(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", json={"phone": 712345678, "amount": "100"})

    assert response.status_code == 500
    assert response.json() == {"message": "A binding error occurred, required field: phone"}
    assert upstream.requests == []


def test_null_phone_binds_as_empty_and_fails_validation(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", json={"phone": None, "amount": "100"})

    assert response.status_code == 400
    assert "not valid" in response.json()["message"]
    assert upstream.requests == []


def test_null_body_binds_as_empty_request(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", content=b"null", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert upstream.requests == []


def test_field_names_match_case_insensitively(make_app, upstream):
    client = TestClient(make_app(upstream))

    response = client.post("/c2b", json={"Phone": "0712345678", "AMOUNT": "100"})

    assert response.status_code == 202
    assert response.json() == {"message": "OK"}
    assert upstream.payloads[0]["Msisdn"] == "254712345678"
    assert upstream.payloads[0]["Amount"] == "100"


def test_upstream_transport_failure_returns_500(make_app):
    def handler(request):
        raise httpx.ConnectError("name resolution failed", request=request)

    client = TestClient(make_app(handler))

    response = client.post("/c2b", json={"phone": "0712345678", "amount": "100"})

    assert response.status_code == 500
    assert response.json() == "Something went wrong while trying to create new c2b request"


def test_upstream_body_read_failure_returns_500(make_app, broken_body_handler):
    client = TestClient(make_app(broken_body_handler))

    response = client.post("/c2b", json={"phone": "0712345678", "amount": "100"})

    assert response.status_code == 500
    assert response.json() == "Something went wrong while reading Mpesa C2B response"


def test_unexpected_errors_use_generic_handler():
    class ExplodingClient(MockMpesaC2BClient):
        async def simulate(self, push):
            raise MalformedRequestError("An error occurred forming POST request")

    config = RelayConfig(integrations_mode="mock")
    app = create_app(config=config, c2b_client=ExplodingClient(config.mpesa))
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post("/c2b", json={"phone": "0712345678", "amount": "100"})

    assert response.status_code == 500
    assert "internal error" in response.json()["message"].lower()


def test_mock_mode_relays_canned_daraja_response():
    app = create_app(config=RelayConfig(integrations_mode="mock"))

    with TestClient(app) as client:
        response = client.post("/c2b", json={"phone": "0712345678", "amount": "100"})
        health = client.get("/health")

    assert response.status_code == 202
    assert json.loads(response.json()["message"])["ResponseCode"] == "0"
    assert app.state.c2b_client.sent[0].msisdn == "254712345678"
    assert health.json()["integrations_mode"] == "mock"
