"""Pydantic models defining shared data contracts."""

from shopperspoint.models.forms import MAX_TAX_PERCENT, NewItemForm, NewListForm, parse_tax_percent
from shopperspoint.models.shopping import Category, ShoppingItem, ShoppingList

__all__ = [
    "Category",
    "ShoppingItem",
    "ShoppingList",
    "MAX_TAX_PERCENT",
    "NewItemForm",
    "NewListForm",
    "parse_tax_percent",
]
