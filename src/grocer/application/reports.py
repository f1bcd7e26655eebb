"""Application services: summary reports (queries).

Each handler only computes numbers and returns DTOs; formatting belongs
to the CLI.  Revenue is always taken from the price snapshot stored on
each sale line, never from the product's current price.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date

from grocer.domain.model.sale import Sale
from grocer.domain.service.sale_ledger import SaleLedger
from grocer.domain.store.client_registry import ClientRegistry
from grocer.domain.store.inventory_store import InventoryStore


@dataclass(frozen=True)
class ProductSalesDTO:
    product_id: int
    product_name: str
    quantity: float
    revenue: float


@dataclass(frozen=True)
class SalesReportDTO:
    start: date
    end: date
    sale_count: int
    total_revenue: float
    products: list[ProductSalesDTO]


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: int
    product_name: str
    category: str
    price: float
    stock: float
    stock_value: float


@dataclass(frozen=True)
class InventoryReportDTO:
    lines: list[InventoryLineDTO]
    total_value: float


@dataclass(frozen=True)
class ClientSummaryDTO:
    client_id: int
    name: str
    order_count: int
    total_spent: float


@dataclass(frozen=True)
class ProductPerformanceDTO:
    products: list[ProductSalesDTO]  # best revenue first
    total_revenue: float


@dataclass(frozen=True)
class SalesStatisticsDTO:
    sale_count: int
    total_revenue: float
    client_sale_count: int
    top_client: ClientSummaryDTO | None
    top_products: list[ProductSalesDTO]  # most units first


def _per_product(sales: list[Sale]) -> list[ProductSalesDTO]:
    """Aggregate quantity and revenue per product over ``sales``."""
    quantities: dict[int, float] = defaultdict(float)
    revenue: dict[int, float] = defaultdict(float)
    names: dict[int, str] = {}
    for sale in sales:
        for line in sale.lines:
            quantities[line.product_id] += line.quantity
            revenue[line.product_id] += line.line_total
            names[line.product_id] = line.product_name
    return [
        ProductSalesDTO(
            product_id=pid,
            product_name=names[pid],
            quantity=quantities[pid],
            revenue=revenue[pid],
        )
        for pid in sorted(names)
    ]


class SalesReportHandler:

    def __init__(self, ledger: SaleLedger) -> None:
        self._ledger = ledger

    def handle(self, start: date, end: date) -> SalesReportDTO:
        """Summarise the sales dated within ``[start, end]``."""
        sales = self._ledger.get_by_date_range(start, end).unwrap()
        return SalesReportDTO(
            start=start,
            end=end,
            sale_count=len(sales),
            total_revenue=sum(s.total for s in sales),
            products=_per_product(sales),
        )


class InventoryReportHandler:

    def __init__(self, inventory: InventoryStore) -> None:
        self._inventory = inventory

    def handle(self) -> InventoryReportDTO:
        lines = [
            InventoryLineDTO(
                product_id=p.id,
                product_name=p.name,
                category=p.category.label,
                price=p.price,
                stock=p.stock,
                stock_value=p.price * p.stock,
            )
            for p in self._inventory.list_all()
        ]
        return InventoryReportDTO(
            lines=lines,
            total_value=sum(line.stock_value for line in lines),
        )


class ClientReportHandler:

    def __init__(self, clients: ClientRegistry) -> None:
        self._clients = clients

    def handle(self) -> list[ClientSummaryDTO]:
        summaries = []
        for client in self._clients.list_all():
            history = self._clients.history_of(client.id).unwrap()
            summaries.append(
                ClientSummaryDTO(
                    client_id=client.id,
                    name=client.name,
                    order_count=len(history),
                    total_spent=sum(s.total for s in history),
                )
            )
        return summaries


class ProductPerformanceHandler:

    def __init__(self, ledger: SaleLedger) -> None:
        self._ledger = ledger

    def handle(self) -> ProductPerformanceDTO:
        products = _per_product(self._ledger.list_all())
        products.sort(key=lambda p: p.revenue, reverse=True)
        return ProductPerformanceDTO(
            products=products,
            total_revenue=sum(p.revenue for p in products),
        )


class SalesStatisticsHandler:

    def __init__(self, ledger: SaleLedger, clients: ClientRegistry) -> None:
        self._ledger = ledger
        self._clients = clients

    def handle(self, top: int = 5) -> SalesStatisticsDTO:
        sales = self._ledger.list_all()
        summaries = ClientReportHandler(self._clients).handle()

        top_client = None
        for summary in summaries:
            if summary.order_count and (
                top_client is None or summary.order_count > top_client.order_count
            ):
                top_client = summary

        products = _per_product(sales)
        products.sort(key=lambda p: p.quantity, reverse=True)

        return SalesStatisticsDTO(
            sale_count=len(sales),
            total_revenue=sum(s.total for s in sales),
            client_sale_count=sum(s.order_count for s in summaries),
            top_client=top_client,
            top_products=products[:top],
        )
