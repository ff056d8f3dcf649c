"""Encoding of persisted shopping state.

Each persisted value lives under its own key in the blob store:

* ``shoppingLists`` holds the whole list collection as a UTF-8 JSON array of
  ``{id, name, items: [{id, name, category, price}]}`` objects.
* ``taxRate`` holds the tax fraction as a JSON number.
* ``selectedListID`` holds the selected list's UUID string and is absent when
  nothing is selected.

Decoders return ``None`` for anything they cannot read; callers substitute
their defaults.
"""

from __future__ import annotations

import json
import logging
import math
from typing import List, Optional, Sequence
from uuid import UUID

from pydantic import TypeAdapter

from shopperspoint.models.shopping import ShoppingList

LISTS_KEY = "shoppingLists"
TAX_RATE_KEY = "taxRate"
SELECTED_LIST_KEY = "selectedListID"

logger = logging.getLogger(__name__)

_LISTS_ADAPTER: TypeAdapter[List[ShoppingList]] = TypeAdapter(List[ShoppingList])


def encode_lists(lists: Sequence[ShoppingList]) -> bytes:
    return _LISTS_ADAPTER.dump_json(list(lists))


def decode_lists(raw: Optional[bytes]) -> Optional[List[ShoppingList]]:
    if raw is None:
        return None
    try:
        return _LISTS_ADAPTER.validate_json(raw)
    except ValueError as exc:
        logger.warning("Discarding unreadable %s payload: %s", LISTS_KEY, exc.__class__.__name__)
        return None


def encode_tax_rate(rate: float) -> bytes:
    return json.dumps(float(rate)).encode("utf-8")


def decode_tax_rate(raw: Optional[bytes]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Discarding unreadable %s payload", TAX_RATE_KEY)
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        logger.warning("Discarding non-numeric %s payload: %r", TAX_RATE_KEY, value)
        return None
    return float(value)


def encode_list_id(list_id: UUID) -> bytes:
    return str(list_id).encode("utf-8")


def decode_list_id(raw: Optional[bytes]) -> Optional[UUID]:
    if raw is None:
        return None
    try:
        return UUID(raw.decode("utf-8").strip())
    except (UnicodeDecodeError, ValueError):
        logger.warning("Discarding unreadable %s payload", SELECTED_LIST_KEY)
        return None


__all__ = [
    "LISTS_KEY",
    "TAX_RATE_KEY",
    "SELECTED_LIST_KEY",
    "encode_lists",
    "decode_lists",
    "encode_tax_rate",
    "decode_tax_rate",
    "encode_list_id",
    "decode_list_id",
]
