"""Currency commands."""

from decimal import Decimal

import click
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.money import parse_money_or_exit
from tillbook.domain.currency import SCALE, CurrencyService, format_amount
from tillbook.domain.errors import DomainError
from tillbook.utils.amount_parser import parse_minor_units


def _parse_rate_or_exit(ctx: click.Context, value: str) -> int:
    """Parse a decimal exchange rate into its scaled integer form."""
    try:
        return parse_minor_units(value, decimals=4)
    except ValueError as e:
        click.echo(f"Error: Invalid exchange rate: {e}", err=True)
        ctx.exit(1)


def _rate_text(exchange_rate: int) -> str:
    return f"{Decimal(exchange_rate) / SCALE:.4f}"


@click.group()
def currency_group():
    """Manage currencies and convert amounts."""
    pass


@currency_group.command("add")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.argument("symbol", metavar="SYMBOL")
@click.option("--rate", default="1", show_default=True, help="Units of this currency per unit of the default currency")
@click.option("--decimals", type=int, default=2, show_default=True, help="Minor-unit digits")
@click.option("--default", "make_default", is_flag=True, help="Make this the default currency")
@click.pass_context
def add_currency(ctx, code: str, name: str, symbol: str, rate: str, decimals: int, make_default: bool):
    """Register a currency.

    The first currency registered becomes the default.

    Examples:
        tillbook currency add USD "US Dollar" "$"
        tillbook currency add EUR Euro "€" --rate 0.92
        tillbook currency add JPY "Japanese Yen" "¥" --rate 150 --decimals 0
    """
    db = ctx.obj["db"]
    service = CurrencyService(db)
    exchange_rate = _parse_rate_or_exit(ctx, rate)

    try:
        service.create_currency(
            code=code,
            name=name,
            symbol=symbol,
            exchange_rate=exchange_rate,
            decimals=decimals,
            is_default=make_default,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    currency = service.get_currency(code)
    suffix = " (default)" if currency.is_default else ""
    click.echo(f"Added currency {currency.code} at rate {_rate_text(currency.exchange_rate)}{suffix}")


@currency_group.command("list")
@click.pass_context
def list_currencies(ctx):
    """List registered currencies."""
    db = ctx.obj["db"]
    service = CurrencyService(db)

    currencies = service.list_currencies()
    if not currencies:
        click.echo("No currencies found.")
        return

    click.echo("\nCurrencies:")
    click.echo("-" * 60)
    for c in currencies:
        marker = "*" if c.is_default else " "
        click.echo(f"{marker} {c.code:5s} | {c.name:20s} | {c.symbol:3s} | Rate: {_rate_text(c.exchange_rate)} | Decimals: {c.decimals}")


@currency_group.command("set-default")
@click.argument("code", metavar="CODE")
@click.pass_context
def set_default(ctx, code: str):
    """Make a currency the default."""
    db = ctx.obj["db"]
    service = CurrencyService(db)

    try:
        service.set_default_currency(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Default currency is now {code.upper()}")


@currency_group.command("rate")
@click.argument("code", metavar="CODE")
@click.argument("rate", metavar="RATE")
@click.pass_context
def set_rate(ctx, code: str, rate: str):
    """Update the exchange rate of a currency.

    Examples:
        tillbook currency rate EUR 0.95
    """
    db = ctx.obj["db"]
    service = CurrencyService(db)
    exchange_rate = _parse_rate_or_exit(ctx, rate)

    try:
        service.update_exchange_rate(code, exchange_rate)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"{code.upper()} rate set to {_rate_text(exchange_rate)}")


@currency_group.command("convert")
@click.argument("amount", metavar="AMOUNT")
@click.argument("from_code", metavar="FROM")
@click.argument("to_code", metavar="TO")
@click.pass_context
def convert_amount(ctx, amount: str, from_code: str, to_code: str):
    """Convert an amount between two registered currencies.

    Examples:
        tillbook currency convert 100 USD EUR
    """
    db = ctx.obj["db"]
    service = CurrencyService(db)

    source = service.get_currency(from_code)
    value = parse_money_or_exit(ctx, db, amount, currency=source)
    try:
        converted = service.convert(value, from_code, to_code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    target = service.get_currency(to_code)
    click.echo(f"{format_amount(value, source)} = {format_amount(converted, target)}")


def register_commands(cli):
    """Register currency commands with main CLI."""
    cli.add_command(currency_group, name="currency")
