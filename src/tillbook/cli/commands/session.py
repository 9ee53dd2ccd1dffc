"""Cash register session commands."""

import click
from tillbook.cli.date_filters import resolve_cli_date_range
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.money import money, parse_money_or_exit, signed_money
from tillbook.cli.tables import echo_session_report
from tillbook.domain.cash_register import CashRegisterService
from tillbook.domain.entities import TransactionType
from tillbook.domain.errors import DomainError
from tillbook.domain.ledger import classify_discrepancy

LEDGER_TYPES = [t.value for t in TransactionType if t != TransactionType.OPENING]


@click.group()
def session_group():
    """Open, inspect and close cash register sessions."""
    pass


@session_group.command("open")
@click.argument("opening_balance", metavar="OPENING_BALANCE")
@click.option("--notes", help="Optional notes")
@click.pass_context
def open_session(ctx, opening_balance: str, notes: str | None):
    """Open the cash register with the counted opening cash.

    Examples:
        tillbook session open 100
        tillbook session open 250.50 --notes "Morning shift"
    """
    db = ctx.obj["db"]
    service = CashRegisterService(db)
    amount = parse_money_or_exit(ctx, db, opening_balance, "opening balance")

    try:
        session = service.open_session(
            opening_balance=amount, opened_by=ctx.obj["operator"], notes=notes
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Opened session {session.session_number} (ID: {session.id}) with {money(db, amount)}")


@session_group.command("close")
@click.argument("actual_balance", metavar="COUNTED_CASH")
@click.option("--session", "session_id", type=int, help="Session ID (defaults to the open session)")
@click.option("--notes", help="Optional closing notes")
@click.pass_context
def close_session(ctx, actual_balance: str, session_id: int | None, notes: str | None):
    """Close a session with the physically counted cash.

    The difference between counted and expected cash is stored and shown.

    Examples:
        tillbook session close 1234.50
        tillbook session close 980 --notes "Short one coin roll"
    """
    db = ctx.obj["db"]
    service = CashRegisterService(db)
    amount = parse_money_or_exit(ctx, db, actual_balance, "counted cash")

    if session_id is None:
        current = service.find_open_session()
        if current is None:
            click.echo("Error: No cash register session is open", err=True)
            ctx.exit(1)
        session_id = current.id

    try:
        session = service.close_session(
            session_id, actual_balance=amount, notes=notes, closed_by=ctx.obj["operator"]
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    status = classify_discrepancy(session.difference)
    click.echo(f"Closed session {session.session_number}")
    click.echo(f"Expected: {money(db, session.expected_balance)}")
    click.echo(f"Counted:  {money(db, session.actual_balance)}")
    click.echo(f"Difference: {signed_money(db, session.difference)} ({status.value})")


@session_group.command("status")
@click.pass_context
def session_status(ctx):
    """Show the open session and its expected cash."""
    db = ctx.obj["db"]
    service = CashRegisterService(db)

    session = service.find_open_session()
    if session is None:
        click.echo("No cash register session is open.")
        return

    click.echo(f"Session {session.session_number} (ID: {session.id}) is open")
    click.echo(f"Opened: {session.opened_at:%Y-%m-%d %H:%M} by {session.opened_by}")
    click.echo(f"Opening balance:  {money(db, session.opening_balance)}")
    click.echo(f"Expected balance: {money(db, service.compute_expected_balance(session))}")


@session_group.command("ledger")
@click.argument("session_id", type=int, required=False)
@click.option("--type", "types", multiple=True, type=click.Choice(LEDGER_TYPES), help="Only show this type (repeatable)")
@click.option("--start-date", help="First day to show (YYYY-MM-DD or 'today')")
@click.option("--end-date", help="Last day to show (YYYY-MM-DD or 'today')")
@click.option("--today", is_flag=True, help="Only today")
@click.option("--yesterday", is_flag=True, help="Only yesterday")
@click.option("--this-week", is_flag=True, help="Only this week")
@click.option("--last-week", is_flag=True, help="Only last week")
@click.option("--this-month", is_flag=True, help="Only this month")
@click.option("--last-month", is_flag=True, help="Only last month")
@click.pass_context
def session_ledger(
    ctx,
    session_id: int | None,
    types: tuple[str, ...],
    start_date: str | None,
    end_date: str | None,
    today: bool,
    yesterday: bool,
    this_week: bool,
    last_week: bool,
    this_month: bool,
    last_month: bool,
):
    """Show the ledger of a session with running cash balance.

    SESSION_ID defaults to the open session. Filters narrow the rows shown;
    the expected balance always covers the whole session.

    Examples:
        tillbook session ledger
        tillbook session ledger 3 --type sale --type expense
        tillbook session ledger --today
    """
    db = ctx.obj["db"]
    service = CashRegisterService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "today": today,
            "yesterday": yesterday,
            "this-week": this_week,
            "last-week": last_week,
            "this-month": this_month,
            "last-month": last_month,
        },
    )

    if session_id is None:
        current = service.find_open_session()
        if current is None:
            click.echo("Error: No cash register session is open; pass a SESSION_ID", err=True)
            ctx.exit(1)
        session_id = current.id

    try:
        report = service.get_session_report(
            session_id,
            start_date=start,
            end_date=end,
            types=[TransactionType(t) for t in types] if types else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    echo_session_report(db, report)


@session_group.command("list")
@click.pass_context
def list_sessions(ctx):
    """List all sessions, most recent first."""
    db = ctx.obj["db"]
    service = CashRegisterService(db)

    sessions = service.list_sessions()
    if not sessions:
        click.echo("No sessions found.")
        return

    click.echo("\nSessions:")
    click.echo("-" * 90)
    for s in sessions:
        closing = money(db, s.actual_balance) if s.actual_balance is not None else "-"
        click.echo(
            f"ID: {s.id:3d} | {s.session_number} | {s.status.value:6s} | "
            f"{s.opened_at:%Y-%m-%d %H:%M} | open {money(db, s.opening_balance):>10} | "
            f"counted {closing:>10} | diff {signed_money(db, s.difference):>9}"
        )


def register_commands(cli):
    """Register session commands with the CLI."""
    cli.add_command(session_group, name="session")
