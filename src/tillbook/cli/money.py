"""CLI helpers for entering and displaying amounts.

Amounts are typed and shown in major units of the default currency and
stored as integer minor units.
"""

from typing import Optional

import click

from tillbook.database.base import Database
from tillbook.domain.currency import format_amount
from tillbook.domain.entities import Currency
from tillbook.utils.amount_parser import parse_minor_units


def default_currency(db: Database) -> Optional[Currency]:
    """Return the default currency, or None before any is registered."""
    return db.get_default_currency()


def parse_money_or_exit(
    ctx: click.Context, db: Database, value: str, label: str = "amount", currency: Optional[Currency] = None
) -> int:
    """Parse a major-unit amount into minor units, or exit with a CLI error."""
    currency = currency or default_currency(db)
    decimals = currency.decimals if currency is not None else 2
    try:
        return parse_minor_units(value, decimals)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def money(db: Database, amount: Optional[int], currency: Optional[Currency] = None) -> str:
    """Format minor units in the given or default currency; None shows as '-'."""
    if amount is None:
        return "-"
    return format_amount(amount, currency or default_currency(db))


def signed_money(db: Database, amount: Optional[int], currency: Optional[Currency] = None) -> str:
    """Format a difference with an explicit '+' for positive values."""
    if amount is None:
        return "-"
    text = money(db, amount, currency)
    return f"+{text}" if amount > 0 else text
