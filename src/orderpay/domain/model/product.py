"""Menu items the checkout prices orders from.

Every product belongs to one menu category and records when it was
registered.  Checkout copies name and unit price into the order line, so
repricing or recategorizing a product never touches placed orders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderpay.domain.exceptions import ValidationError
from orderpay.domain.model.value_objects import Money


class Category(Enum):
    SANDWICH = "SANDWICH"
    SIDE = "SIDE"
    DRINK = "DRINK"
    DESSERT = "DESSERT"

    @staticmethod
    def parse(raw: str) -> Category:
        try:
            return Category(str(raw).strip().upper())
        except ValueError:
            raise ValidationError(
                f"Unknown category {raw!r}; expected one of "
                + ", ".join(c.value for c in Category)
            ) from None


@dataclass
class Product:

    id: int
    name: str
    price: Money
    category: Category
    description: str = ""
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def reprice(self, price: Money) -> None:
        if price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = price

    def move_to(self, category: Category) -> None:
        self.category = category
