"""CLI commands for summary reports.

The report handlers compute everything; these commands only print.
"""

from __future__ import annotations

from datetime import datetime

import click

from grocer.application.reports import (
    ClientReportHandler,
    InventoryReportHandler,
    ProductPerformanceHandler,
    SalesReportHandler,
    SalesStatisticsHandler,
)
from grocer.domain.exceptions import DomainException
from grocer.infrastructure.bootstrap import App
from grocer.infrastructure.cli.common import money, qty

_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.command("sales")
@click.option("--from", "start", required=True, type=_DATE, help="First day, YYYY-MM-DD.")
@click.option("--to", "end", required=True, type=_DATE, help="Last day, YYYY-MM-DD.")
@click.pass_obj
def report_sales(app: App, start: datetime, end: datetime) -> None:
    """Revenue and products sold within a date range."""
    handler = SalesReportHandler(ledger=app.ledger)

    try:
        report = handler.handle(start.date(), end.date())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not report.sale_count:
        click.echo("No sales found in the specified date range.")
        return

    click.echo(f"Sales from {report.start} to {report.end}")
    click.echo(f"Number of sales: {report.sale_count}")
    click.echo(f"Total revenue:   {money(report.total_revenue)}")
    click.echo()
    click.echo(f"  {'Product':<25} {'Quantity':>10} {'Revenue':>10}")
    click.echo(f"  {'-'*47}")
    for p in report.products:
        click.echo(f"  {p.product_name:<25} {qty(p.quantity):>10} {money(p.revenue):>10}")


@click.command("inventory")
@click.pass_obj
def report_inventory(app: App) -> None:
    """Stock levels and stock value of every product."""
    report = InventoryReportHandler(inventory=app.inventory).handle()

    if not report.lines:
        click.echo("No products found in the inventory.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<10} {'Price':>8} {'Stock':>8} {'Value':>10}")
    click.echo("-" * 67)
    for line in report.lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.category:<10} "
            f"{money(line.price):>8} {qty(line.stock):>8} {money(line.stock_value):>10}"
        )
    click.echo("-" * 67)
    click.echo(f"{'Total stock value':<56} {money(report.total_value):>10}")


@click.command("clients")
@click.pass_obj
def report_clients(app: App) -> None:
    """Orders and spending per client."""
    summaries = ClientReportHandler(clients=app.clients).handle()

    if not summaries:
        click.echo("No clients found in the system.")
        return

    click.echo(f"{'ID':<6} {'Name':<25} {'Orders':>7} {'Spent':>10}")
    click.echo("-" * 51)
    for s in summaries:
        click.echo(f"{s.client_id:<6} {s.name:<25} {s.order_count:>7} {money(s.total_spent):>10}")


@click.command("products")
@click.pass_obj
def report_products(app: App) -> None:
    """Products ranked by revenue."""
    report = ProductPerformanceHandler(ledger=app.ledger).handle()

    if not report.products:
        click.echo("No sales data available.")
        return

    click.echo(f"{'Product':<25} {'Quantity':>10} {'Revenue':>10} {'Share':>7}")
    click.echo("-" * 55)
    for p in report.products:
        share = p.revenue / report.total_revenue * 100 if report.total_revenue else 0.0
        click.echo(
            f"{p.product_name:<25} {qty(p.quantity):>10} {money(p.revenue):>10} {share:>6.1f}%"
        )
    click.echo("-" * 55)
    click.echo(f"{'Total revenue':<36} {money(report.total_revenue):>10}")


@click.command("stats")
@click.pass_obj
def report_stats(app: App) -> None:
    """Overall sales statistics."""
    stats = SalesStatisticsHandler(ledger=app.ledger, clients=app.clients).handle()

    if not stats.sale_count:
        click.echo("No sales data available.")
        return

    click.echo(f"Total sales:        {stats.sale_count}")
    click.echo(f"Total revenue:      {money(stats.total_revenue)}")
    click.echo(f"Sales with clients: {stats.client_sale_count}")
    if stats.top_client is not None:
        click.echo(
            f"Top client:         {stats.top_client.name} "
            f"({stats.top_client.order_count} orders)"
        )
    click.echo()
    click.echo("Most sold products:")
    for p in stats.top_products:
        click.echo(f"  {p.product_name:<25} {qty(p.quantity):>10}")
