"""CLI error handling helpers."""

import logging

import click

from tillbook.domain.errors import DataIntegrityError, DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Integrity errors mean stored records disagree with each other, so they
    are also logged.
    """
    if isinstance(error, DataIntegrityError):
        logger.error("Integrity check failed: %s", error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
