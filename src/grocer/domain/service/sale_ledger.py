"""Domain service: Sale Ledger.

The ledger coordinates the cross-aggregate operation of selling several
products at once.  It reads products through the InventoryStore, asks
the store to deduct stock, registers the resulting Sale, and links it
to the buying client through the ClientRegistry.

The two-phase approach (validate-then-mutate) ensures stock is never
left partially deducted when one item of a sale is invalid.  This only
holds while a single operation runs at a time: nothing may touch stock
between the two phases.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from grocer.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from grocer.domain.model.identity import IdSequence
from grocer.domain.model.product import Product
from grocer.domain.model.sale import Sale, SaleItemSpec, SaleLine
from grocer.domain.model.value_objects import Quantity
from grocer.domain.outcome import Outcome
from grocer.domain.store.client_registry import ClientRegistry
from grocer.domain.store.inventory_store import InventoryStore

logger = logging.getLogger(__name__)


class SaleLedger:

    def __init__(
        self,
        inventory: InventoryStore,
        clients: ClientRegistry,
        ids: IdSequence | None = None,
    ) -> None:
        self._inventory = inventory
        self._clients = clients
        self._sales: dict[int, Sale] = {}
        self._ids = ids or IdSequence()

    # --- Sale registration ----------------------------------------------------

    def register_sale(
        self,
        items: Sequence[SaleItemSpec] | None,
        sale_date: date | None,
        client_id: int | None = None,
    ) -> Outcome[Sale]:
        """Validate, commit and record a sale, all or nothing.

        Phase 1 checks every item and builds the Sale.  The product must
        exist and the quantity must be positive and covered by stock.
        Nothing is mutated; the first problem rejects the sale.

        Phase 2 deducts stock for every line, registers the Sale and,
        for a client sale, appends it to the client's history.
        A failed history append does not undo the sale; it is returned
        as a warning.
        """
        try:
            lines = self._validate(items, sale_date)
            sale = Sale.create(
                sale_id=self._ids.peek,
                sale_date=sale_date,  # type: ignore[arg-type]
                lines=lines,
                client_id=client_id,
            )
        except DomainException as exc:
            logger.info("Sale rejected: %s", exc)
            return Outcome.failure(exc)

        # Phase 2: commit. Every check has passed; nothing below can reject.
        for line in sale.lines:
            product = self._inventory.find_by_id(line.product_id).unwrap()
            self._inventory.set_stock(
                line.product_id, product.stock - line.quantity
            ).unwrap()

        self._ids.observe(sale.id)
        self._sales[sale.id] = sale
        logger.info(
            "Sale #%d committed: %d item(s), total %.2f", sale.id, len(sale.lines), sale.total
        )

        warnings: tuple[str, ...] = ()
        if client_id is not None:
            linked = self._clients.append_sale(client_id, sale)
            if not linked.ok:
                message = (
                    f"Sale #{sale.id} was registered but could not be added "
                    f"to the history of client #{client_id}: {linked.reason}"
                )
                logger.warning("%s", message)
                warnings = (message,)

        return Outcome.success(sale, warnings=warnings)

    def _validate(
        self,
        items: Sequence[SaleItemSpec] | None,
        sale_date: date | None,
    ) -> list[SaleLine]:
        if not items:
            raise ValidationError("Sale must contain at least one item")
        if sale_date is None:
            raise ValidationError("Sale date is required")

        lines: list[SaleLine] = []
        seen: set[int] = set()

        for item in items:
            if item is None:
                raise ValidationError("Sale item cannot be empty")
            product = self._resolve(item.product_id)
            quantity = Quantity(item.quantity).value
            if product.id in seen:
                raise ValidationError(
                    f"Product '{product.name}' appears more than once in the sale"
                )
            if product.stock < quantity:
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"(need {quantity:g}, have {product.stock:g})"
                )
            seen.add(product.id)
            lines.append(
                SaleLine(
                    product_id=product.id,
                    product_name=product.name,
                    unit_price=product.price,  # <-- price snapshot
                    quantity=quantity,
                )
            )

        return lines

    def _resolve(self, product_id: int | None) -> Product:
        found = self._inventory.find_by_id(product_id)
        if not found.ok or found.value is None:
            raise EntityNotFoundError(f"Product not found: #{product_id}")
        return found.value

    # --- Queries --------------------------------------------------------------

    def get_by_id(self, sale_id: int | None) -> Outcome[Sale | None]:
        if sale_id is None:
            return Outcome.failure(ValidationError("Sale ID cannot be empty"))
        return Outcome.success(self._sales.get(sale_id))

    def get_by_date_range(
        self,
        start: date | None,
        end: date | None,
    ) -> Outcome[list[Sale]]:
        """Sales dated within ``[start, end]``, both ends inclusive."""
        if start is None or end is None:
            return Outcome.failure(
                ValidationError("Start date and end date cannot be empty")
            )
        if start > end:
            return Outcome.failure(
                ValidationError(f"Start date {start} is after end date {end}")
            )
        matches = [s for s in self._sales.values() if start <= s.date <= end]
        return Outcome.success(sorted(matches, key=lambda s: (s.date, s.id)))

    def sales_for_client(self, client_id: int) -> list[Sale]:
        """Every sale made for ``client_id``, in id order."""
        return [s for s in self.list_all() if s.client_id == client_id]

    def list_all(self) -> list[Sale]:
        return sorted(self._sales.values(), key=lambda s: s.id)

    # --- Bulk replace (persistence) -------------------------------------------

    def replace_all(self, sales: Iterable[Sale] | None) -> Outcome[None]:
        if sales is None:
            return Outcome.failure(ValidationError("Sale list cannot be empty"))
        items = list(sales)
        if any(s is None for s in items):
            return Outcome.failure(ValidationError("Sale list contains an empty entry"))
        self._sales = {s.id: s for s in items}
        self._ids.reset(after=max(self._sales, default=0))
        return Outcome.success()
