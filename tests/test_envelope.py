import pytest

from razorpay_payments import ApiError, SerializationError
from razorpay_payments.core.envelope import decode_envelope, discard, extract_api_error
from razorpay_payments.resources.orders import Order


def test_error_body_yields_api_error():
    body = {"error": {"code": "BAD_REQUEST_ERROR", "description": "The amount must be atleast INR 1.00"}}

    with pytest.raises(ApiError) as excinfo:
        decode_envelope(body, Order.from_response)

    assert excinfo.value.code == "BAD_REQUEST_ERROR"
    assert excinfo.value.description == "The amount must be atleast INR 1.00"
    assert excinfo.value.field is None
    assert excinfo.value.metadata is None


def test_error_is_tried_before_the_decoder():
    calls = []

    def decoder(body):
        calls.append(body)
        return body

    with pytest.raises(ApiError):
        decode_envelope({"error": {"code": "X", "description": "y"}}, decoder)

    assert calls == []


def test_error_with_every_optional_field():
    error = extract_api_error(
        {
            "error": {
                "code": "BAD_REQUEST_ERROR",
                "description": "Payment failed",
                "source": "bank",
                "step": "payment_authorization",
                "reason": "payment_failed",
                "metadata": {"payment_id": "pay_29QQoUBi66xm2f", "order_id": "order_DBJOWzybf0sJbb"},
                "field": "amount",
            }
        }
    )

    assert error.source == "bank"
    assert error.step == "payment_authorization"
    assert error.reason == "payment_failed"
    assert error.field == "amount"
    assert error.metadata == {
        "payment_id": "pay_29QQoUBi66xm2f",
        "order_id": "order_DBJOWzybf0sJbb",
    }


def test_error_metadata_sent_as_empty_array():
    error = extract_api_error({"error": {"code": "X", "description": "y", "metadata": []}})

    assert error.metadata == {}


def test_error_display():
    error = ApiError("BAD_REQUEST_ERROR", "Invalid amount", field="amount")

    text = str(error)

    assert text.startswith("Razorpay Error: BAD_REQUEST_ERROR: Invalid amount\n\n")
    assert "source: none" in text
    assert "field: amount" in text
    assert text.endswith("metadata: none")


def test_success_body_is_decoded():
    order = decode_envelope(
        {"id": "order_abc", "amount": 199, "currency": "INR", "status": "created"},
        Order.from_response,
    )

    assert order.id == "order_abc"


def test_non_error_body_is_not_extracted():
    assert extract_api_error({"id": "order_abc"}) is None
    assert extract_api_error([1, 2]) is None


def test_malformed_error_envelope():
    with pytest.raises(SerializationError):
        decode_envelope({"error": "nope"}, discard)
    with pytest.raises(SerializationError):
        decode_envelope({"error": {"description": "missing code"}}, discard)


def test_body_matching_neither_shape():
    with pytest.raises(SerializationError):
        decode_envelope({"unexpected": True}, Order.from_response)


def test_wrong_entity_tag_is_rejected():
    with pytest.raises(SerializationError):
        decode_envelope(
            {"id": "order_abc", "entity": "payment", "amount": 1, "currency": "INR", "status": "created"},
            Order.from_response,
        )


def test_discard_ignores_body():
    assert decode_envelope({"deleted": True}, discard) is None
