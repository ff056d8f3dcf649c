"""Tests for encoding persisted shopping state."""

from __future__ import annotations

import json
from uuid import uuid4

import pytest

from shopperspoint.codec import (
    decode_list_id,
    decode_lists,
    decode_tax_rate,
    encode_list_id,
    encode_lists,
    encode_tax_rate,
)
from shopperspoint.models.shopping import Category, ShoppingItem, ShoppingList


def _sample_lists():
    weekly = ShoppingList(
        name="Weekly",
        items=[
            ShoppingItem(name="Milk", category=Category.FOOD, price=3.0),
            ShoppingItem(name="Soap", category=Category.CLEANING, price=1.25),
        ],
    )
    pharmacy = ShoppingList(
        name="Pharmacy",
        items=[ShoppingItem(name="Aspirin", category=Category.MEDICATION, price=6.5)],
    )
    return [weekly, ShoppingList(name="Empty"), pharmacy]


def test_lists_round_trip_preserves_fields_and_order():
    original = _sample_lists()

    decoded = decode_lists(encode_lists(original))

    assert decoded == original
    assert [shopping_list.name for shopping_list in decoded] == ["Weekly", "Empty", "Pharmacy"]
    assert [item.name for item in decoded[0].items] == ["Milk", "Soap"]


def test_encoded_lists_use_plain_json_field_names():
    original = _sample_lists()

    payload = json.loads(encode_lists(original).decode("utf-8"))

    assert list(payload[0]) == ["id", "name", "items"]
    assert list(payload[0]["items"][0]) == ["id", "name", "category", "price"]
    assert payload[0]["items"][1]["category"] == "Cleaning"
    assert payload[0]["id"] == str(original[0].id)


def test_decode_lists_reads_hand_written_payload():
    list_id, item_id = uuid4(), uuid4()
    raw = json.dumps(
        [{"id": str(list_id), "name": "Party", "items": [
            {"id": str(item_id), "name": "Chips", "category": "Food", "price": 2}
        ]}]
    ).encode("utf-8")

    (party,) = decode_lists(raw)

    assert party.id == list_id
    assert party.items[0].id == item_id
    assert party.items[0].price == 2.0


@pytest.mark.parametrize(
    "raw",
    [
        None,
        b"",
        b"not json",
        b'{"name": "not a list"}',
        b'[{"id": "nope", "name": "x", "items": []}]',
        b'[{"id": "1b4e28ba-2fa1-11d2-883f-0016d3cca427", "name": "x", '
        b'"items": [{"id": "1b4e28ba-2fa1-11d2-883f-0016d3cca428", "name": "y", "category": "Toys", "price": 1}]}]',
        b"\xff\xfe",
    ],
)
def test_decode_lists_returns_none_for_unreadable_payloads(raw):
    assert decode_lists(raw) is None


def test_tax_rate_round_trip():
    assert decode_tax_rate(encode_tax_rate(0.07)) == 0.07
    assert decode_tax_rate(encode_tax_rate(0)) == 0.0


@pytest.mark.parametrize("raw", [None, b"", b"abc", b'"0.01"', b"true", b"NaN", b"\xff"])
def test_decode_tax_rate_rejects_garbage(raw):
    assert decode_tax_rate(raw) is None


def test_list_id_round_trip():
    list_id = uuid4()

    assert encode_list_id(list_id) == str(list_id).encode("utf-8")
    assert decode_list_id(encode_list_id(list_id)) == list_id


@pytest.mark.parametrize("raw", [None, b"", b"not-a-uuid", b"\xff"])
def test_decode_list_id_rejects_garbage(raw):
    assert decode_list_id(raw) is None
