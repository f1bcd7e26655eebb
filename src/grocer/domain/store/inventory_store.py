"""Inventory store: owns the Product collection.

Products are immutable, so ``set_stock`` is the only way a product's
stock changes, and it is where the non-negative-stock invariant is
enforced.  All operations return an ``Outcome`` rather than raising.
"""

from __future__ import annotations

from collections.abc import Iterable

from grocer.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from grocer.domain.model.identity import IdSequence
from grocer.domain.model.product import Category, Product
from grocer.domain.outcome import Outcome


class InventoryStore:

    def __init__(self, ids: IdSequence | None = None) -> None:
        self._products: dict[int, Product] = {}
        self._ids = ids or IdSequence()

    def next_id(self) -> int:
        return self._ids.next()

    # --- Commands -------------------------------------------------------------

    def add(self, product: Product | None) -> Outcome[Product]:
        """Insert a product, overwriting any product with the same id."""
        if product is None:
            return Outcome.failure(ValidationError("Product cannot be empty"))
        if not isinstance(product, Product):
            return Outcome.failure(ValidationError(f"Not a product: {product!r}"))
        self._products[product.id] = product
        self._ids.observe(product.id)
        return Outcome.success(product)

    def set_stock(self, product_id: int | None, new_stock: float) -> Outcome[Product]:
        """Replace a product with a copy at ``new_stock``."""
        if product_id is None:
            return Outcome.failure(ValidationError("Product ID cannot be empty"))
        product = self._products.get(product_id)
        if product is None:
            return Outcome.failure(
                EntityNotFoundError(f"Product #{product_id} not found")
            )
        try:
            updated = product.with_stock(new_stock)
        except DomainException as exc:
            return Outcome.failure(exc)
        self._products[product_id] = updated
        return Outcome.success(updated)

    def replace_all(self, products: Iterable[Product] | None) -> Outcome[None]:
        """Clear the store and reinsert ``products`` keyed by id."""
        if products is None:
            return Outcome.failure(ValidationError("Product list cannot be empty"))
        items = list(products)
        if any(p is None for p in items):
            return Outcome.failure(ValidationError("Product list contains an empty entry"))
        self._products = {p.id: p for p in items}
        self._ids.reset(after=max(self._products, default=0))
        return Outcome.success()

    # --- Queries --------------------------------------------------------------

    def find_by_id(self, product_id: int | None) -> Outcome[Product | None]:
        """Return the product, or an ok Outcome with ``None`` if absent."""
        if product_id is None:
            return Outcome.failure(ValidationError("Product ID cannot be empty"))
        return Outcome.success(self._products.get(product_id))

    def find_by_category(self, category: Category | None) -> Outcome[list[Product]]:
        if category is None:
            return Outcome.failure(ValidationError("Category cannot be empty"))
        return Outcome.success(
            [p for p in self._products.values() if p.category is category]
        )

    def list_all(self) -> list[Product]:
        return list(self._products.values())
