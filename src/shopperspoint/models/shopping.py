"""Shopping list models."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Fixed set of item categories offered by the item picker."""

    FOOD = "Food"
    MEDICATION = "Medication"
    CLEANING = "Cleaning"
    OTHER = "Other"


class ShoppingItem(BaseModel):
    """Single priced entry on a shopping list."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    category: Category
    price: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class ShoppingList(BaseModel):
    """Named, insertion-ordered collection of items.

    Lists are immutable snapshots; the store swaps in a new copy on every change.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str
    items: Tuple[ShoppingItem, ...] = Field(default=())

    model_config = ConfigDict(frozen=True)

    def with_items(self, items: Iterable[ShoppingItem]) -> "ShoppingList":
        return self.model_copy(update={"items": tuple(items)})

    def subtotal(self) -> float:
        return sum(item.price for item in self.items)


__all__ = ["Category", "ShoppingItem", "ShoppingList"]
