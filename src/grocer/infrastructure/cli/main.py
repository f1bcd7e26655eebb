import logging
from pathlib import Path

import click

from grocer.infrastructure.bootstrap import (
    DATA_DIR_ENV,
    DEFAULT_DATA_DIR,
    LOG_DIR_ENV,
    open_app,
)
from grocer.infrastructure.cli.client_commands import (
    client_add,
    client_find,
    client_history,
    client_list,
    client_show,
)
from grocer.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
    product_stock,
)
from grocer.infrastructure.cli.report_commands import (
    report_clients,
    report_inventory,
    report_products,
    report_sales,
    report_stats,
)
from grocer.infrastructure.cli.sale_commands import sale_create, sale_list, sale_show
from grocer.infrastructure.logging_config import configure_logging

_DIR = click.Path(file_okay=False, path_type=Path)


@click.group()
@click.option("--data-dir", type=_DIR, envvar=DATA_DIR_ENV, default=DEFAULT_DATA_DIR,
              show_default=True, help="Directory holding the saved data.")
@click.option("--log-dir", type=_DIR, envvar=LOG_DIR_ENV, default=None,
              help="Also write JSON logs to grocer.log in this directory.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug details.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_dir: Path | None, verbose: bool) -> None:
    """Grocer: store inventory, clients and sales."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING, log_dir=log_dir)
    ctx.obj = open_app(data_dir)
    if not ctx.obj.loaded.ok:
        click.echo(f"Warning: could not load data. {ctx.obj.loaded.reason}", err=True)


@cli.group()
def product() -> None:
    """Manage products and stock."""


@cli.group()
def client() -> None:
    """Manage clients."""


@cli.group()
def sale() -> None:
    """Register and look up sales."""


@cli.group()
def report() -> None:
    """Summary reports."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_stock)
client.add_command(client_add)
client.add_command(client_find)
client.add_command(client_history)
client.add_command(client_list)
client.add_command(client_show)
sale.add_command(sale_create)
sale.add_command(sale_list)
sale.add_command(sale_show)
report.add_command(report_clients)
report.add_command(report_inventory)
report.add_command(report_products)
report.add_command(report_sales)
report.add_command(report_stats)
