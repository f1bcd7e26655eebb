"""Sale aggregate: an immutable record of a committed sale.

A Sale captures a snapshot of each product sold (name and unit price at
the time of sale), so later price changes never alter its total.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType

from grocer.domain.exceptions import ValidationError
from grocer.domain.model.value_objects import Quantity


@dataclass(frozen=True)
class SaleItemSpec:
    """Input: one product id and the quantity the buyer wants."""

    product_id: int | None
    quantity: float


@dataclass(frozen=True)
class SaleLine:
    """One product of a sale, with its price locked at sale time."""

    product_id: int
    product_name: str
    unit_price: float
    quantity: float

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Sale:
    """Aggregate root for sales.

    Use ``Sale.create()`` for new sales; it validates the lines and
    computes the total.  The ``__init__`` is kept simple so the snapshot
    loader can reconstitute persisted sales with their stored total.
    """

    id: int
    date: date
    lines: tuple[SaleLine, ...]
    total: float
    client_id: int | None = None

    @staticmethod
    def create(
        sale_id: int,
        sale_date: date,
        lines: list[SaleLine] | tuple[SaleLine, ...],
        client_id: int | None = None,
    ) -> Sale:
        if sale_date is None:
            raise ValidationError("Sale date is required")
        if not lines:
            raise ValidationError("Sale must contain at least one item")

        seen: set[int] = set()
        for line in lines:
            if line is None or line.product_id is None:
                raise ValidationError("A sale cannot contain a missing product")
            if line.product_id in seen:
                raise ValidationError(
                    f"Product #{line.product_id} appears more than once in the sale"
                )
            seen.add(line.product_id)
            Quantity(line.quantity)
            if line.unit_price < 0:
                raise ValidationError(f"Negative price for {line.product_name}")

        total = sum(line.line_total for line in lines)
        return Sale(
            id=sale_id,
            date=sale_date,
            lines=tuple(lines),
            total=total,
            client_id=client_id,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def quantities(self) -> Mapping[int, float]:
        """Read-only mapping of product id -> quantity sold."""
        return MappingProxyType({line.product_id: line.quantity for line in self.lines})

    @property
    def is_anonymous(self) -> bool:
        return self.client_id is None
