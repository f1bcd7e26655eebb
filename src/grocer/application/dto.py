"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals (or the stores' live objects) to the outside
world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from grocer.domain.model.sale import Sale


@dataclass(frozen=True)
class SaleLineDTO:
    """Output: a single line of a sale as displayed to the user."""

    product_id: int
    product_name: str
    quantity: float
    unit_price: float
    line_total: float


@dataclass(frozen=True)
class SaleDTO:
    """Output: a complete sale as displayed to the user."""

    id: int
    date: str  # ISO, e.g. "2024-01-15"
    client_id: int | None
    client_name: str | None
    items: list[SaleLineDTO]
    total: float
    warnings: tuple[str, ...] = field(default_factory=tuple)


def to_sale_dto(
    sale: Sale,
    client_name: str | None = None,
    warnings: tuple[str, ...] = (),
) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        date=sale.date.isoformat(),
        client_id=sale.client_id,
        client_name=client_name,
        items=[
            SaleLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                line_total=line.line_total,
            )
            for line in sale.lines
        ],
        total=sale.total,
        warnings=tuple(warnings),
    )
