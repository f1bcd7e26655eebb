"""CLI commands for clients."""

from __future__ import annotations

import click

from grocer.application.client_history import ClientHistoryHandler
from grocer.application.register_client import RegisterClientHandler
from grocer.domain.exceptions import DomainException
from grocer.domain.model.client import Client
from grocer.infrastructure.bootstrap import App
from grocer.infrastructure.cli.common import money, persist


def _display_clients(clients: list[Client]) -> None:
    click.echo(f"{'ID':<6} {'Name':<25}")
    click.echo("-" * 32)
    for c in clients:
        click.echo(f"{c.id:<6} {c.name:<25}")


@click.command("add")
@click.option("--name", required=True, help="Client name.")
@click.pass_obj
def client_add(app: App, name: str) -> None:
    """Register a new client."""
    handler = RegisterClientHandler(clients=app.clients)

    try:
        client = handler.handle(name=name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    persist(app)
    click.echo(f"Client #{client.id} '{client.name}' registered")


@click.command("show")
@click.option("--id", "client_id", required=True, type=int, help="Client ID.")
@click.pass_obj
def client_show(app: App, client_id: int) -> None:
    """Show a single client."""
    client = app.clients.find_by_id(client_id).value
    if client is None:
        raise click.ClickException(f"Client #{client_id} not found")

    history = app.clients.history_of(client_id).unwrap()
    click.echo(f"Client #{client.id}")
    click.echo(f"Name:   {client.name}")
    click.echo(f"Orders: {len(history)}")


@click.command("find")
@click.option("--name", required=True, help="Part of the client name (any case).")
@click.pass_obj
def client_find(app: App, name: str) -> None:
    """Search clients by name."""
    try:
        clients = app.clients.find_by_name(name).unwrap()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not clients:
        click.echo(f"No clients found matching '{name}'.")
        return
    _display_clients(clients)


@click.command("list")
@click.pass_obj
def client_list(app: App) -> None:
    """List all clients."""
    clients = app.clients.list_all()
    if not clients:
        click.echo("No clients registered.")
        return
    _display_clients(clients)


@click.command("history")
@click.option("--id", "client_id", required=True, type=int, help="Client ID.")
@click.pass_obj
def client_history(app: App, client_id: int) -> None:
    """Show a client's order history, oldest first."""
    handler = ClientHistoryHandler(clients=app.clients)

    try:
        sales = handler.handle(client_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sales:
        click.echo(f"Client #{client_id} has no orders yet.")
        return

    click.echo(f"{'Sale':<6} {'Date':<12} {'Items':>6} {'Total':>10}")
    click.echo("-" * 37)
    for s in sales:
        click.echo(f"{s.id:<6} {s.date:<12} {len(s.items):>6} {money(s.total):>10}")
