"""CLI commands for products and stock."""

from __future__ import annotations

import click

from grocer.application.add_product import AddProductHandler
from grocer.application.update_stock import UpdateStockHandler
from grocer.domain.exceptions import DomainException
from grocer.domain.model.product import Category
from grocer.infrastructure.bootstrap import App
from grocer.infrastructure.cli.common import money, persist, qty

_CATEGORY_CHOICE = click.Choice([c.label for c in Category], case_sensitive=False)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, type=float, help="Unit price (e.g. 1.50).")
@click.option("--stock", required=True, type=float, help="Initial stock (kg or units).")
@click.option("--category", required=True, type=_CATEGORY_CHOICE, help="Product category.")
@click.pass_obj
def product_add(app: App, name: str, price: float, stock: float, category: str) -> None:
    """Add a new product to the inventory."""
    handler = AddProductHandler(inventory=app.inventory)

    try:
        product = handler.handle(
            name=name, price=price, stock=stock, category=Category.parse(category)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    persist(app)
    click.echo(f"Product #{product.id} '{product.name}' added at {money(product.price)}")


@click.command("list")
@click.option("--category", default=None, type=_CATEGORY_CHOICE, help="Only this category.")
@click.pass_obj
def product_list(app: App, category: str | None) -> None:
    """List products, optionally filtered by category."""
    if category is None:
        products = app.inventory.list_all()
    else:
        products = app.inventory.find_by_category(Category.parse(category)).unwrap()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<25} {'Category':<10} {'Price':>10} {'Stock':>10}")
    click.echo("-" * 65)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<25} {p.category.label:<10} {money(p.price):>10} {qty(p.stock):>10}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_show(app: App, product_id: int) -> None:
    """Show a single product."""
    product = app.inventory.find_by_id(product_id).value
    if product is None:
        raise click.ClickException(f"No product found with ID: {product_id}")

    click.echo(f"Product #{product.id}")
    click.echo(f"Name:     {product.name}")
    click.echo(f"Category: {product.category.label}")
    click.echo(f"Price:    {money(product.price)}")
    click.echo(f"Stock:    {qty(product.stock)}")


@click.command("stock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--set", "new_stock", required=True, type=float, help="New stock value.")
@click.pass_obj
def product_stock(app: App, product_id: int, new_stock: float) -> None:
    """Overwrite a product's stock level."""
    handler = UpdateStockHandler(inventory=app.inventory)

    try:
        product = handler.handle(product_id=product_id, new_stock=new_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    persist(app)
    click.echo(f"Stock for '{product.name}' set to {qty(product.stock)}")
