"""Product entity and its category.

Products are immutable values owned by the inventory store.  A stock
change produces a new Product, which ``InventoryStore.set_stock`` swaps
in for the old one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from grocer.domain.exceptions import ValidationError
from grocer.domain.model.value_objects import is_number


class Category(Enum):
    FRUIT = "Fruit"
    VEGETABLE = "Vegetable"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value

    @staticmethod
    def parse(raw: str) -> Category:
        """Accept either the label ("Fruit") or the member name, any case."""
        needle = (raw or "").strip().lower()
        for category in Category:
            if needle in (category.value.lower(), category.name.lower()):
                return category
        raise ValidationError(f"Unknown category: {raw!r}")


@dataclass(frozen=True)
class Product:
    """A product on the shelf.

    Every instance satisfies the product invariants, however it was
    built.  ``Product.create()`` additionally trims the name and stores
    the numbers as floats.
    """

    id: int
    name: str
    price: float
    stock: float
    category: Category

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Product name cannot be empty")
        if not is_number(self.price) or self.price < 0:
            raise ValidationError(f"Price cannot be negative, got {self.price}")
        if not is_number(self.stock) or self.stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.stock}")
        if not isinstance(self.category, Category):
            raise ValidationError("Category is required")

    @staticmethod
    def create(
        product_id: int,
        name: str,
        price: float,
        stock: float,
        category: Category,
    ) -> Product:
        product = Product(
            id=product_id, name=name, price=price, stock=stock, category=category
        )
        return replace(
            product,
            name=product.name.strip(),
            price=float(product.price),
            stock=float(product.stock),
        )

    def with_stock(self, new_stock: float) -> Product:
        """Copy of this product at a new stock level; never negative."""
        if not is_number(new_stock):
            raise ValidationError(f"Invalid stock value: {new_stock!r}")
        if new_stock < 0:
            raise ValidationError(
                f"Stock cannot be negative ({self.name}: {new_stock})"
            )
        return replace(self, stock=float(new_stock))
