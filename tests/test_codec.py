from datetime import datetime, timezone

import pytest

from razorpay_payments.core.codec import (
    expect_entity,
    optional,
    parse_list,
    parse_notes,
    parse_optional_timestamp,
    parse_timestamp,
)


@pytest.mark.parametrize("value", [None, [], {}])
def test_empty_notes_decode_to_empty_mapping(value):
    assert parse_notes(value) == {}


def test_notes_values_are_strings():
    assert parse_notes({"a": "x", "b": 1, "c": None}) == {"a": "x", "b": "1", "c": ""}


@pytest.mark.parametrize("value", [["a"], "text", 7])
def test_other_notes_shapes_are_rejected(value):
    with pytest.raises(TypeError):
        parse_notes(value)


def test_timestamps_are_utc_datetimes():
    assert parse_timestamp(1566986570) == datetime(2019, 8, 28, 10, 2, 50, tzinfo=timezone.utc)
    assert parse_optional_timestamp(None) is None


@pytest.mark.parametrize("value", [True, "1566986570", None])
def test_non_numeric_timestamps_are_rejected(value):
    with pytest.raises(TypeError):
        parse_timestamp(value)


def test_expect_entity_only_checks_present_tags():
    expect_entity({"entity": "order"}, "order")
    expect_entity({}, "order")

    with pytest.raises(ValueError, match="expected entity to be 'order'"):
        expect_entity({"entity": "payment"}, "order")


def test_optional_and_list_helpers():
    assert optional(int, None) is None
    assert optional(int, "3") == 3
    assert parse_list(int, None) == []
    assert parse_list(int, ["1", "2"]) == [1, 2]

    with pytest.raises(TypeError):
        parse_list(int, {"a": 1})
