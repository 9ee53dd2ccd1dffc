"""CLI helpers for customer and supplier resolution."""

from __future__ import annotations

import click
from tillbook.utils.entity_resolver import resolve_entity


def resolve_entity_or_exit(ctx: click.Context, entities, value: str | int, kind: str) -> int:
    """Resolve a customer or supplier name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_entity(entities, value, kind)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
