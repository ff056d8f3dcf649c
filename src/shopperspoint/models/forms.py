"""Input validation for values collected from the user before they reach the store."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shopperspoint.models.shopping import Category

MAX_TAX_PERCENT = 10


class NewListForm(BaseModel):
    """Name entered in the "New Shopping List" form."""

    name: str

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("List name must not be empty")
        return value


class NewItemForm(BaseModel):
    """Fields entered in the "Add Item" form.

    ``price`` accepts the raw text typed into the decimal pad and is only
    accepted when it parses to a finite, non-negative number.
    """

    name: str
    category: Category = Field(default=Category.FOOD)
    price: float

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Item name must not be empty")
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _parse_price(cls, value: object) -> float:
        if isinstance(value, str):
            value = value.strip()
        try:
            parsed = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise ValueError(f"Price must be a number, got {value!r}") from None
        if not math.isfinite(parsed) or parsed < 0:
            raise ValueError("Price must be a non-negative amount")
        return parsed


def parse_tax_percent(value: int) -> float:
    """Convert the whole-percent stepper value (0-10) into a tax fraction."""

    if not 0 <= value <= MAX_TAX_PERCENT:
        raise ValueError(f"Tax percent must be between 0 and {MAX_TAX_PERCENT}")
    return value / 100


__all__ = ["MAX_TAX_PERCENT", "NewItemForm", "NewListForm", "parse_tax_percent"]
