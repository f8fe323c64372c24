import base64
import json
from dataclasses import replace
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests

from razorpay_payments import (
    ApiError,
    InvalidIdError,
    RazorpayClient,
    SerializationError,
    TransportError,
)
from razorpay_payments.core.client import RequestDescriptor
from razorpay_payments.core.envelope import discard
from razorpay_payments.resources.common import Currency
from razorpay_payments.resources.orders import CreateOrder, Order, OrderStatus


def _basic_auth(credentials):
    token = base64.b64encode(f"{credentials.key_id}:{credentials.key_secret}".encode()).decode()
    return f"Basic {token}"


def test_get_builds_versioned_url_with_query(client, respond, last_request):
    respond({"entity": "collection", "count": 0, "items": []})

    client.api.get(RequestDescriptor("/orders", payload={"count": 10}), lambda body: body)

    request = last_request()
    assert request.method == "GET"
    assert request.url == "https://api.example.com/v1/orders?count=10"
    assert request.headers["Authorization"] == _basic_auth(client.config.credentials)
    assert request.body is None


def test_every_request_sends_user_agent(client, session):
    client.api.get(RequestDescriptor("/orders"), lambda body: body)

    _, kwargs = session.request.call_args
    assert kwargs["headers"]["User-Agent"] == client.config.user_agent
    assert kwargs["timeout"] is None


def test_post_sends_json_and_decodes_order(client, respond, last_request):
    respond({"id": "order_abc", "amount": 199, "currency": "INR", "status": "created"})

    order = client.orders.create(CreateOrder(amount=199, currency=Currency.INR))

    request = last_request()
    assert request.method == "POST"
    assert request.url == "https://api.example.com/v1/orders"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.body) == {"amount": 199, "currency": "INR"}
    assert isinstance(order, Order)
    assert order.id == "order_abc"
    assert order.amount == 199
    assert order.currency is Currency.INR
    assert order.status is OrderStatus.CREATED


def test_post_returning_error_envelope(client, respond):
    respond({"error": {"code": "BAD_REQUEST", "description": "amount must be positive"}})

    with pytest.raises(ApiError) as excinfo:
        client.orders.create(CreateOrder(amount=199, currency=Currency.INR))

    assert excinfo.value.code == "BAD_REQUEST"
    assert excinfo.value.description == "amount must be positive"


def test_version_override(client, last_request):
    client.api.delete(RequestDescriptor("/accounts/acc_1", version="v2"), discard)

    assert last_request().url == "https://api.example.com/v2/accounts/acc_1"


def test_delete_encodes_payload_as_query(client, last_request):
    client.api.delete(RequestDescriptor("/items/item_1", payload={"force": True}), discard)

    request = last_request()
    assert request.method == "DELETE"
    assert dict(parse_qsl(urlsplit(request.url).query)) == {"force": "true"}


def test_put_and_patch_send_json(client, session):
    client.api.put(RequestDescriptor("/customers/cust_1", payload={"name": "A"}), discard)
    assert session.request.call_args.args[0] == "PUT"
    assert session.request.call_args.kwargs["json"] == {"name": "A"}

    client.api.patch(RequestDescriptor("/orders/order_1", payload={"notes": {}}), discard)
    assert session.request.call_args.args[0] == "PATCH"
    assert session.request.call_args.kwargs["json"] == {"notes": {}}


def test_post_form_sends_form_data(client, last_request):
    client.api.post_form(RequestDescriptor("/documents", payload={"purpose": "dispute_evidence"}), discard)

    request = last_request()
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.body == "purpose=dispute_evidence"


def test_non_success_status_is_transport_error(client, respond):
    respond(
        {"error": {"code": "BAD_REQUEST_ERROR", "description": "The id provided does not exist"}},
        status_code=400,
    )

    with pytest.raises(TransportError) as excinfo:
        client.orders.fetch("order_missing")

    error = excinfo.value
    assert error.status_code == 400
    assert isinstance(error.cause, requests.HTTPError)
    assert error.api_error.code == "BAD_REQUEST_ERROR"
    assert "does not exist" in error.body


def test_non_success_status_without_json_body(client, respond):
    respond(status_code=502, raw="<html>Bad gateway</html>")

    with pytest.raises(TransportError) as excinfo:
        client.orders.fetch("order_abc")

    assert excinfo.value.status_code == 502
    assert excinfo.value.api_error is None


def test_connection_failure_is_transport_error(client, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(TransportError) as excinfo:
        client.orders.fetch("order_abc")

    assert isinstance(excinfo.value.cause, requests.ConnectionError)
    assert session.request.call_count == 1


def test_invalid_json_on_success_is_serialization_error(client, respond):
    respond(raw="not json")

    with pytest.raises(SerializationError):
        client.orders.fetch("order_abc")


def test_invalid_id_fails_before_any_request(client, session):
    with pytest.raises(InvalidIdError):
        client.orders.fetch("pay_29QQoUBi66xm2f")

    session.request.assert_not_called()


def test_nested_query_payload_fails_before_any_request(client, session):
    with pytest.raises(SerializationError):
        client.api.get(RequestDescriptor("/orders", payload={"filter": {"count": 1}}), discard)

    session.request.assert_not_called()


def test_configured_timeout_is_passed_through(config, session):
    client = RazorpayClient(replace(config, timeout_seconds=2.5), session=session)
    client.api.get(RequestDescriptor("/orders"), discard)

    assert session.request.call_args.kwargs["timeout"] == 2.5
