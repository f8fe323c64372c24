import json
from unittest.mock import MagicMock

import pytest
import requests

from razorpay_payments import ClientConfig, Credentials, RazorpayClient

KEY_ID = "rzp_test_key"
KEY_SECRET = "rzp_test_secret"
BASE_URL = "https://api.example.com"


def make_response(body=None, status_code=200, raw=None):
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.url = BASE_URL
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    if raw is not None:
        response._content = raw.encode("utf-8")
    else:
        response._content = json.dumps({} if body is None else body).encode("utf-8")
    return response


@pytest.fixture
def config():
    return ClientConfig(
        credentials=Credentials(key_id=KEY_ID, key_secret=KEY_SECRET),
        base_url=BASE_URL,
        webhook_secret="whsec_test",
    )


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.request.return_value = make_response({})
    return session


@pytest.fixture
def client(config, session):
    return RazorpayClient(config, session=session)


@pytest.fixture
def respond(session):
    def _respond(body=None, status_code=200, raw=None):
        session.request.return_value = make_response(body, status_code, raw)

    return _respond


@pytest.fixture
def last_request(session):
    """Rebuild the request the client handed to the session."""

    def _last_request():
        args, kwargs = session.request.call_args
        method, url = args
        return requests.Request(
            method,
            url,
            params=kwargs.get("params"),
            json=kwargs.get("json"),
            data=kwargs.get("data"),
            auth=kwargs.get("auth"),
            headers=kwargs.get("headers"),
        ).prepare()

    return _last_request


@pytest.fixture
def order_body():
    return {
        "id": "order_DBJOWzybf0sJbb",
        "entity": "order",
        "amount": 50000,
        "amount_paid": 0,
        "amount_due": 50000,
        "currency": "INR",
        "receipt": "receipt#1",
        "offer_id": None,
        "status": "created",
        "attempts": 0,
        "notes": [],
        "created_at": 1566986570,
    }


@pytest.fixture
def payment_body():
    return {
        "id": "pay_29QQoUBi66xm2f",
        "entity": "payment",
        "amount": 5000,
        "currency": "INR",
        "status": "captured",
        "order_id": "order_DBJOWzybf0sJbb",
        "international": False,
        "method": "card",
        "amount_refunded": 0,
        "refund_status": None,
        "captured": True,
        "card_id": "card_29QQoUBi66xm2f",
        "email": "gaurav.kumar@example.com",
        "contact": "+919000090000",
        "notes": {"merchant_order_id": "3432"},
        "fee": 118,
        "tax": 18,
        "acquirer_data": [],
        "created_at": 1400826750,
    }


@pytest.fixture
def refund_body():
    return {
        "id": "rfnd_FP8QHiV938haTz",
        "entity": "refund",
        "amount": 500100,
        "receipt": "Receipt No. 31",
        "currency": "INR",
        "payment_id": "pay_29QQoUBi66xm2f",
        "notes": [],
        "acquirer_data": {"arn": None},
        "created_at": 1597078866,
        "batch_id": None,
        "status": "processed",
        "speed_processed": "normal",
        "speed_requested": "normal",
    }
