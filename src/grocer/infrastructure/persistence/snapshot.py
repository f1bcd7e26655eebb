"""Bulk save/load of every store through a PersistenceGateway.

Collections are ``products``, ``sales`` and ``clients``, loaded in that
order so client histories can be resolved against the loaded sales.

Loading is all-or-nothing: every present collection is read and decoded
before any store is replaced.  A missing collection only produces a
warning and leaves its store as it was.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from grocer.domain.exceptions import (
    CollectionNotFoundError,
    DomainException,
    PersistenceError,
)
from grocer.domain.model.client import Client
from grocer.domain.model.product import Category, Product
from grocer.domain.model.sale import Sale, SaleLine
from grocer.domain.outcome import Outcome
from grocer.domain.repository.persistence_gateway import PersistenceGateway
from grocer.domain.service.sale_ledger import SaleLedger
from grocer.domain.store.client_registry import ClientRegistry
from grocer.domain.store.inventory_store import InventoryStore

logger = logging.getLogger(__name__)

PRODUCTS = "products"
SALES = "sales"
CLIENTS = "clients"


class DataSnapshot:

    def __init__(
        self,
        gateway: PersistenceGateway,
        inventory: InventoryStore,
        clients: ClientRegistry,
        ledger: SaleLedger,
    ) -> None:
        self._gateway = gateway
        self._inventory = inventory
        self._clients = clients
        self._ledger = ledger

    # --- Save -----------------------------------------------------------------

    def save_all(self) -> Outcome[None]:
        """Write every store to its collection, all collections or none.

        In-memory state is never touched, whatever the result.
        """
        snapshot = {
            PRODUCTS: [self._product_to_raw(p) for p in self._inventory.list_all()],
            SALES: [self._sale_to_raw(s) for s in self._ledger.list_all()],
            CLIENTS: [self._client_to_raw(c) for c in self._clients.list_all()],
        }
        try:
            self._gateway.save_many(snapshot)
        except PersistenceError as exc:
            logger.warning("Could not save data: %s", exc)
            return Outcome.failure(exc)
        logger.info(
            "Saved %d product(s), %d sale(s), %d client(s)",
            len(snapshot[PRODUCTS]), len(snapshot[SALES]), len(snapshot[CLIENTS]),
        )
        return Outcome.success()

    # --- Load -----------------------------------------------------------------

    def load_all(self) -> Outcome[None]:
        """Replace store contents with the saved snapshots (best effort)."""
        warnings: list[str] = []

        try:
            raw_products = self._load_or_none(PRODUCTS, warnings)
            raw_sales = self._load_or_none(SALES, warnings)
            raw_clients = self._load_or_none(CLIENTS, warnings)

            products = (
                None if raw_products is None
                else [self._product_to_domain(r) for r in raw_products]
            )
            sales = (
                None if raw_sales is None
                else [self._sale_to_domain(r) for r in raw_sales]
            )
            clients = None
            histories = None
            if raw_clients is not None:
                known = {s.id: s for s in (sales if sales is not None else self._ledger.list_all())}
                clients = [self._client_to_domain(r) for r in raw_clients]
                histories = {
                    int(r["id"]): self._resolve_history(r, known) for r in raw_clients
                }
        except PersistenceError as exc:
            logger.warning("Could not load data: %s", exc)
            return Outcome.failure(exc)
        except (DomainException, AttributeError, KeyError, TypeError, ValueError) as exc:
            error = PersistenceError(f"Malformed snapshot record: {exc!r}")
            logger.warning("Could not load data: %s", error)
            return Outcome.failure(error)

        if products is not None:
            self._inventory.replace_all(products).unwrap()
        if sales is not None:
            self._ledger.replace_all(sales).unwrap()
        if clients is not None:
            self._clients.replace_all(clients, histories).unwrap()

        logger.info("Data loaded from snapshot")
        return Outcome.success(warnings=tuple(warnings))

    def _load_or_none(self, collection: str, warnings: list[str]) -> list[dict] | None:
        try:
            return self._gateway.load(collection)
        except CollectionNotFoundError as exc:
            message = f"No saved {collection}: {exc}"
            logger.info(message)
            warnings.append(message)
            return None

    @staticmethod
    def _resolve_history(raw: dict, known: dict[int, Sale]) -> list[Sale]:
        """Sales of one client record, each made for that client and listed once."""
        client_id = int(raw["id"])
        history: list[Sale] = []
        for sale_id in raw.get("history", []):
            sale = known.get(sale_id)
            if sale is None:
                raise PersistenceError(
                    f"Client #{client_id} refers to unknown sale #{sale_id}"
                )
            if sale.client_id != client_id:
                raise PersistenceError(
                    f"Client #{client_id} lists sale #{sale_id}, "
                    f"which was not made for that client"
                )
            if sale in history:
                raise PersistenceError(
                    f"Client #{client_id} lists sale #{sale_id} more than once"
                )
            history.append(sale)
        return history

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _product_to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": product.price,
            "stock": product.stock,
            "category": product.category.label,
        }

    @staticmethod
    def _product_to_domain(raw: dict) -> Product:
        return Product.create(
            product_id=int(raw["id"]),
            name=raw["name"],
            price=float(raw["price"]),
            stock=float(raw["stock"]),
            category=Category.parse(raw["category"]),
        )

    @staticmethod
    def _sale_to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "date": sale.date.isoformat(),
            "client_id": sale.client_id,
            "total": sale.total,
            "lines": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "unit_price": line.unit_price,
                    "quantity": line.quantity,
                }
                for line in sale.lines
            ],
        }

    @staticmethod
    def _sale_to_domain(raw: dict) -> Sale:
        lines = [
            SaleLine(
                product_id=int(i["product_id"]),
                product_name=i["product_name"],
                unit_price=float(i["unit_price"]),
                quantity=float(i["quantity"]),
            )
            for i in raw["lines"]
        ]
        sale = Sale.create(
            sale_id=int(raw["id"]),
            sale_date=date.fromisoformat(raw["date"]),
            lines=lines,
            client_id=raw.get("client_id"),
        )
        # The stored total is authoritative; it is never recomputed.
        return replace(sale, total=float(raw["total"]))

    def _client_to_raw(self, client: Client) -> dict:
        history = self._clients.history_of(client.id).unwrap()
        return {
            "id": client.id,
            "name": client.name,
            "history": [s.id for s in history],
        }

    @staticmethod
    def _client_to_domain(raw: dict) -> Client:
        return Client.create(client_id=int(raw["id"]), name=raw["name"])
