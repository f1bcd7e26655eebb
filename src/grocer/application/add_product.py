"""Application service: Add Product use case."""

from __future__ import annotations

from grocer.domain.model.product import Category, Product
from grocer.domain.store.inventory_store import InventoryStore


class AddProductHandler:

    def __init__(self, inventory: InventoryStore) -> None:
        self._inventory = inventory

    def handle(self, name: str, price: float, stock: float, category: Category) -> Product:
        """Add a new product to the inventory under a fresh id."""
        product = Product.create(
            product_id=self._inventory.next_id(),
            name=name,
            price=price,
            stock=stock,
            category=category,
        )
        return self._inventory.add(product).unwrap()
