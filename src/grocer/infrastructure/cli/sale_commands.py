"""CLI commands for sales."""

from __future__ import annotations

from datetime import datetime

import click

from grocer.application.dto import SaleDTO
from grocer.application.list_sales import ListSalesHandler
from grocer.application.register_sale import RegisterSaleHandler
from grocer.application.show_sale import ShowSaleHandler
from grocer.domain.exceptions import DomainException
from grocer.domain.model.sale import SaleItemSpec
from grocer.infrastructure.bootstrap import App
from grocer.infrastructure.cli.common import money, persist, qty

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _parse_items(raw: str) -> list[SaleItemSpec]:
    """Parse '1:4,2:0.5' (product id : quantity) into SaleItemSpec list."""
    specs: list[SaleItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
        except ValueError:
            raise click.BadParameter(f"Invalid product ID '{id_str}'.")
        try:
            quantity = float(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product #{product_id}."
            )
        specs.append(SaleItemSpec(product_id=product_id, quantity=quantity))
    return specs


def _display_sale(dto: SaleDTO) -> None:
    """Shared formatting for displaying a sale."""
    click.echo(f"Sale #{dto.id}  ({dto.date})")
    if dto.client_id is not None:
        click.echo(f"Client: #{dto.client_id} {dto.client_name or ''}".rstrip())
    else:
        click.echo("Client: anonymous")
    click.echo()
    click.echo(f"  {'Product':<25} {'Qty':>8} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*56}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<25} {qty(item.quantity):>8} "
            f"{money(item.unit_price):>10} {money(item.line_total):>10}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Total':<34} {money(dto.total):>21}")


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--client", "client_id", default=None, type=int, help="Client ID (omit for an anonymous sale).")
@click.option("--date", "sale_date", default=None, type=_DATE, help="Sale date, YYYY-MM-DD (default: today).")
@click.pass_obj
def sale_create(app: App, items: str, client_id: int | None, sale_date: datetime | None) -> None:
    """Register a sale and deduct its items from stock."""
    specs = _parse_items(items)

    handler = RegisterSaleHandler(ledger=app.ledger, clients=app.clients)

    try:
        dto = handler.handle(
            specs,
            sale_date=sale_date.date() if sale_date else None,
            client_id=client_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    persist(app)
    _display_sale(dto)
    for warning in dto.warnings:
        click.echo(f"Warning: {warning}", err=True)


@click.command("show")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to display.")
@click.pass_obj
def sale_show(app: App, sale_id: int) -> None:
    """Show details of a registered sale."""
    handler = ShowSaleHandler(ledger=app.ledger, clients=app.clients)

    try:
        dto = handler.handle(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("list")
@click.option("--from", "start", default=None, type=_DATE, help="First day, YYYY-MM-DD.")
@click.option("--to", "end", default=None, type=_DATE, help="Last day, YYYY-MM-DD.")
@click.pass_obj
def sale_list(app: App, start: datetime | None, end: datetime | None) -> None:
    """List sales, optionally only those within a date range (inclusive)."""
    handler = ListSalesHandler(ledger=app.ledger, clients=app.clients)

    try:
        sales = handler.handle(
            start=start.date() if start else None,
            end=end.date() if end else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"{'ID':<6} {'Date':<12} {'Client':<20} {'Items':>6} {'Total':>10}")
    click.echo("-" * 58)
    for s in sales:
        client = s.client_name or ("anonymous" if s.client_id is None else f"#{s.client_id}")
        click.echo(f"{s.id:<6} {s.date:<12} {client:<20} {len(s.items):>6} {money(s.total):>10}")
