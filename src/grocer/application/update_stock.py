"""Application service: Update Stock use case."""

from __future__ import annotations

from grocer.domain.model.product import Product
from grocer.domain.store.inventory_store import InventoryStore


class UpdateStockHandler:

    def __init__(self, inventory: InventoryStore) -> None:
        self._inventory = inventory

    def handle(self, product_id: int, new_stock: float) -> Product:
        """Overwrite a product's stock level (e.g. after a delivery or a count)."""
        return self._inventory.set_stock(product_id, new_stock).unwrap()
