import pytest

from razorpay_payments import InvalidIdError, OrderId, PaymentId, SerializationError
from razorpay_payments.core.ids import AddonId, InstantSettlementId, InstantSettlementPayoutId


def test_prefixed_id_is_a_plain_string():
    order_id = OrderId("order_DBJOWzybf0sJbb")

    assert order_id == "order_DBJOWzybf0sJbb"
    assert f"/orders/{order_id}" == "/orders/order_DBJOWzybf0sJbb"
    assert repr(order_id) == "OrderId('order_DBJOWzybf0sJbb')"


@pytest.mark.parametrize("value", ["pay_29QQoUBi66xm2f", "", "Order_1", "orderX"])
def test_wrong_prefix_is_rejected(value):
    with pytest.raises(InvalidIdError) as excinfo:
        OrderId(value)

    assert excinfo.value.prefix == "order_"
    assert excinfo.value.typename == "OrderId"


def test_invalid_id_error_is_a_value_and_serialization_error():
    with pytest.raises(ValueError):
        PaymentId("order_1")
    with pytest.raises(SerializationError):
        PaymentId(42)


def test_parse_returns_the_same_instance_for_typed_ids():
    payment_id = PaymentId("pay_1")

    assert PaymentId.parse(payment_id) is payment_id
    assert PaymentId.parse("pay_1") == payment_id


def test_overlapping_prefixes_are_distinct():
    InstantSettlementPayoutId("setlodp_1")
    AddonId("ao_1")

    with pytest.raises(InvalidIdError):
        InstantSettlementPayoutId("setlod_1")
