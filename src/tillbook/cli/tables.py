"""Tabular output shared by the ledger commands."""

import click

from tillbook.cli.money import default_currency, money, signed_money
from tillbook.database.base import Database
from tillbook.domain.entities import EntityLedgerEntry, SessionReport, TransactionType
from tillbook.domain.ledger import classify_discrepancy

TYPE_LABELS = {
    TransactionType.OPENING: "Opening",
    TransactionType.SALE: "Sale",
    TransactionType.CUSTOMER_PAYMENT: "Cust. payment",
    TransactionType.SUPPLIER_PAYMENT: "Supp. payment",
    TransactionType.PURCHASE: "Purchase",
    TransactionType.EXPENSE: "Expense",
}


def echo_session_report(db: Database, report: SessionReport) -> None:
    """Print a session header, its ledger rows and its totals."""
    currency = default_currency(db)
    session = report.session
    click.echo(f"\nSession {session.session_number} ({session.status.value})")
    click.echo(f"Opened: {session.opened_at:%Y-%m-%d %H:%M} by {session.opened_by}")
    if session.closed_at is not None:
        click.echo(f"Closed: {session.closed_at:%Y-%m-%d %H:%M} by {session.closed_by or '-'}")
    if report.filtered:
        click.echo("(filtered view; totals cover the whole session)")

    click.echo("-" * 100)
    click.echo(
        f"{'Time':<16} | {'Type':<13} | {'Description':<30} | {'Amount':>12} | {'Cash':>10} | {'Balance':>10}"
    )
    click.echo("-" * 100)
    for row in report.rows:
        txn = row.transaction
        description = txn.description[:30]
        click.echo(
            f"{txn.timestamp:%Y-%m-%d %H:%M} | {TYPE_LABELS[txn.type]:<13} | {description:<30} | "
            f"{money(db, txn.amount, currency):>12} | {signed_money(db, txn.cash_amount, currency):>10} | "
            f"{money(db, row.balance, currency):>10}"
        )
    click.echo("-" * 100)

    summary = report.summary
    click.echo(f"Sales:     {summary.sales_count:4d}   cash in  {money(db, summary.sales_cash, currency):>12}")
    click.echo(f"Payments:  {summary.payments_count:4d}   cash net {signed_money(db, summary.payments_cash, currency):>12}")
    click.echo(f"Purchases: {summary.purchases_count:4d}   cash out {money(db, summary.purchases_cash, currency):>12}")
    click.echo(f"Expenses:  {summary.expenses_count:4d}   cash out {money(db, summary.expenses_cash, currency):>12}")
    click.echo(f"Opening balance:  {money(db, session.opening_balance, currency):>12}")
    click.echo(f"Expected balance: {money(db, report.expected_balance, currency):>12}")

    if session.difference is not None:
        status = classify_discrepancy(session.difference)
        click.echo(f"Actual balance:   {money(db, session.actual_balance, currency):>12}")
        click.echo(f"Difference:       {signed_money(db, session.difference, currency):>12} ({status.value})")


def echo_entity_ledger(db: Database, title: str, entries: list[EntityLedgerEntry], stored_balance: int) -> None:
    """Print a customer or supplier ledger with its running balance."""
    currency = default_currency(db)
    click.echo(f"\n{title}")
    if not entries:
        click.echo("No ledger entries.")
    else:
        click.echo("-" * 96)
        click.echo(f"{'Date':<16} | {'Description':<36} | {'Debit':>11} | {'Credit':>11} | {'Balance':>11}")
        click.echo("-" * 96)
        for entry in entries:
            debit = money(db, entry.debit, currency) if entry.debit else ""
            credit = money(db, entry.credit, currency) if entry.credit else ""
            click.echo(
                f"{entry.date:%Y-%m-%d %H:%M} | {entry.description[:36]:<36} | {debit:>11} | "
                f"{credit:>11} | {money(db, entry.running_balance, currency):>11}"
            )
        click.echo("-" * 96)
    click.echo(f"Balance: {money(db, stored_balance, currency)}")
