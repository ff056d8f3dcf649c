"""Display formatting for prices and totals."""

from __future__ import annotations

import math

from shopperspoint.models.shopping import ShoppingItem
from shopperspoint.store import ShoppingStore


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def tax_percent(rate: float) -> int:
    """Whole tax percent, truncated (0.07 shows as 7%, 0.075 as 7%)."""

    # 0.07 * 100 == 7.000000000000001 and 0.29 * 100 == 28.999999999999996
    return math.floor(round(rate * 100, 9))


def format_tax_percent(rate: float) -> str:
    return f"{tax_percent(rate)}%"


def format_item(item: ShoppingItem) -> str:
    return f"{item.name} ({item.category.value}) {format_price(item.price)}"


def format_total(store: ShoppingStore) -> str:
    return f"Total (incl. {format_tax_percent(store.tax_rate)} tax): {format_price(store.calculate_total())}"


__all__ = ["format_item", "format_price", "format_tax_percent", "format_total", "tax_percent"]
