import json
from dataclasses import replace

import pytest

from razorpay_payments import (
    ConfigError,
    RazorpayClient,
    WebhookParseError,
    WebhookSignatureError,
    construct_event,
    construct_webhook_event,
    sign,
)
from razorpay_payments.resources.orders import Order
from razorpay_payments.resources.payments import Payment, PaymentStatus
from razorpay_payments.resources.webhooks import EventType, WebhookPayloadItemName

SECRET = "whsec_test"


@pytest.fixture
def event_body(payment_body, order_body):
    return json.dumps(
        {
            "entity": "event",
            "account_id": "acc_BFQ7uQEaa7j2z7",
            "event": "payment.captured",
            "contains": ["payment", "order"],
            "payload": {
                "payment": {"entity": payment_body},
                "order": {"entity": order_body},
            },
            "created_at": 1567674606,
        }
    )


def _flip_last_char(signature):
    return signature[:-1] + ("0" if signature[-1] != "0" else "1")


def test_valid_signature_returns_typed_event(event_body):
    event = construct_event(event_body, sign(event_body, SECRET), SECRET)

    assert event.event is EventType.PAYMENT_CAPTURED
    assert event.account_id == "acc_BFQ7uQEaa7j2z7"
    assert event.contains == [WebhookPayloadItemName.PAYMENT, WebhookPayloadItemName.ORDER]
    assert event.created_at.timestamp() == 1567674606

    payment = event.entity("payment")
    assert isinstance(payment, Payment)
    assert payment.status is PaymentStatus.CAPTURED
    assert isinstance(event.entity(WebhookPayloadItemName.ORDER), Order)
    assert event.entity("refund") is None


def test_bytes_body_is_accepted(event_body):
    raw = event_body.encode("utf-8")

    event = construct_event(raw, sign(raw, SECRET), SECRET)

    assert event.event is EventType.PAYMENT_CAPTURED


def test_one_changed_character_fails_authentication(event_body):
    signature = _flip_last_char(sign(event_body, SECRET))

    with pytest.raises(WebhookSignatureError, match="Bad signature"):
        construct_event(event_body, signature, SECRET)


def test_signature_is_checked_before_parsing():
    body = "not even json"

    with pytest.raises(WebhookSignatureError):
        construct_event(body, "deadbeef", SECRET)


def test_authentic_but_invalid_json_is_parse_error():
    body = "{not json"

    with pytest.raises(WebhookParseError) as excinfo:
        construct_event(body, sign(body, SECRET), SECRET)

    assert isinstance(excinfo.value.cause, ValueError)
    assert str(excinfo.value).startswith("Parsing error: ")


@pytest.mark.parametrize(
    "document",
    [
        {"entity": "payment", "id": "pay_1"},
        {"entity": "event", "event": "payment.captured"},
        {"entity": "event", "account_id": "acc_1", "event": "no.such.event", "contains": [], "created_at": 1},
        ["event"],
    ],
)
def test_authentic_json_that_is_not_an_event(document):
    body = json.dumps(document)

    with pytest.raises(WebhookParseError):
        construct_event(body, sign(body, SECRET), SECRET)


def test_unmodelled_entities_stay_raw():
    body = json.dumps(
        {
            "entity": "event",
            "account_id": "acc_BFQ7uQEaa7j2z7",
            "event": "payout.processed",
            "contains": ["payout"],
            "payload": {"payout": {"entity": {"id": "pout_1", "amount": 100}, "data": []}},
            "created_at": 1567674606,
        }
    )

    event = construct_event(body, sign(body, SECRET), SECRET)

    assert event.entity("payout") == {"id": "pout_1", "amount": 100}
    assert event.payload[WebhookPayloadItemName.PAYOUT].data == []


def test_mismatched_entity_shape_falls_back_to_raw():
    raw_order = {"id": "order_1", "unexpected": True}
    body = json.dumps(
        {
            "entity": "event",
            "account_id": "acc_BFQ7uQEaa7j2z7",
            "event": "order.paid",
            "contains": ["order"],
            "payload": {"order": {"entity": raw_order}},
            "created_at": 1567674606,
        }
    )

    event = construct_event(body, sign(body, SECRET), SECRET)

    assert event.entity("order") == raw_order


def test_client_uses_configured_secret(client, event_body):
    event = client.construct_event(event_body, sign(event_body, SECRET))

    assert event.event is EventType.PAYMENT_CAPTURED


def test_client_without_secret(config, session, event_body):
    client = RazorpayClient(replace(config, webhook_secret=None), session=session)

    with pytest.raises(ConfigError):
        client.construct_event(event_body, sign(event_body, SECRET))


def test_construct_webhook_event_reads_secret_from_environment(event_body):
    event = construct_webhook_event(
        event_body,
        sign(event_body, SECRET),
        env_file=None,
        base={"RAZORPAY_WEBHOOK_SECRET": SECRET},
    )

    assert event.account_id == "acc_BFQ7uQEaa7j2z7"


def test_construct_webhook_event_requires_a_secret(event_body):
    with pytest.raises(ConfigError):
        construct_webhook_event(event_body, "sig", env_file=None, base={})
