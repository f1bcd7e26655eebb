"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import click

from grocer.infrastructure.bootstrap import App


def persist(app: App) -> None:
    """Save every store after a mutating command."""
    saved = app.save()
    if not saved.ok:
        raise click.ClickException(f"Change not saved: {saved.reason}")


def money(amount: float) -> str:
    return f"{amount:.2f}"


def qty(amount: float) -> str:
    return f"{amount:g}"
