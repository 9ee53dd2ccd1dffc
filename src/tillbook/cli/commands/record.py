"""Commands that record sales, purchases, payments and expenses."""

from datetime import datetime

import click
from tillbook.cli.entity_resolution import resolve_entity_or_exit
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.money import money, parse_money_or_exit
from tillbook.domain.entities import EntityType, PaymentMethod, PaymentTransactionType
from tillbook.domain.errors import DomainError
from tillbook.domain.expense import ExpenseService
from tillbook.domain.payment import PaymentService
from tillbook.domain.purchase import PurchaseService
from tillbook.domain.sale import SaleService
from tillbook.utils.date_parser import parse_datetime

PAYMENT_METHODS = [m.value for m in PaymentMethod]


def _parse_date_or_exit(ctx: click.Context, value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)


def _warn_if_no_session(db) -> None:
    if db.get_open_session() is None:
        click.echo("Warning: No cash register session is open; not counted in any till", err=True)


@click.command("sale")
@click.argument("total", metavar="TOTAL")
@click.option("--paid", help="Amount received now (defaults to TOTAL)")
@click.option("--customer", help="Customer name or ID (omit for a walk-in sale)")
@click.option("--method", type=click.Choice(PAYMENT_METHODS), default="cash", show_default=True, help="Tender used")
@click.option("--discount", default="0", help="Discount granted")
@click.option("--subtotal", help="Amount before discount (defaults to TOTAL + discount)")
@click.option("--date", "date_str", help="Sale time (defaults to now)")
@click.option("--notes", help="Optional notes")
@click.pass_context
def sale(
    ctx,
    total: str,
    paid: str | None,
    customer: str | None,
    method: str,
    discount: str,
    subtotal: str | None,
    date_str: str | None,
    notes: str | None,
):
    """Record a sale.

    The unpaid part of a sale is added to the customer's balance.

    Examples:
        tillbook sale 25.00
        tillbook sale 100 --paid 40 --customer "Alice Martin"
        tillbook sale 60 --method card --discount 5
    """
    db = ctx.obj["db"]
    service = SaleService(db)

    total_amount = parse_money_or_exit(ctx, db, total, "total")
    paid_amount = parse_money_or_exit(ctx, db, paid, "paid amount") if paid is not None else total_amount
    discount_amount = parse_money_or_exit(ctx, db, discount, "discount")
    subtotal_amount = parse_money_or_exit(ctx, db, subtotal, "subtotal") if subtotal is not None else None
    date = _parse_date_or_exit(ctx, date_str)

    customer_id = None
    if customer is not None:
        customer_id = resolve_entity_or_exit(ctx, db.list_customers(), customer, "customer")

    _warn_if_no_session(db)
    try:
        sale_id = service.record_sale(
            total_amount=total_amount,
            paid_amount=paid_amount,
            payment_method=PaymentMethod(method),
            customer_id=customer_id,
            subtotal=subtotal_amount,
            discount_amount=discount_amount,
            date=date,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded sale of {money(db, total_amount)} (ID: {sale_id})")
    if paid_amount < total_amount:
        click.echo(f"Added {money(db, total_amount - paid_amount)} to the customer's balance")


@click.command("purchase")
@click.argument("supplier", metavar="SUPPLIER")
@click.argument("total", metavar="TOTAL")
@click.option("--paid", help="Amount paid now (defaults to TOTAL)")
@click.option("--method", type=click.Choice(PAYMENT_METHODS), default="cash", show_default=True, help="Tender used")
@click.option("--discount", default="0", help="Discount received")
@click.option("--subtotal", help="Amount before discount (defaults to TOTAL + discount)")
@click.option("--date", "date_str", help="Invoice time (defaults to now)")
@click.option("--notes", help="Optional notes")
@click.pass_context
def purchase(
    ctx,
    supplier: str,
    total: str,
    paid: str | None,
    method: str,
    discount: str,
    subtotal: str | None,
    date_str: str | None,
    notes: str | None,
):
    """Record a purchase invoice from a supplier.

    SUPPLIER can be a supplier name or ID. The unpaid part is added to
    what we owe the supplier.

    Examples:
        tillbook purchase "Fresh Farms" 300
        tillbook purchase 2 500 --paid 0
    """
    db = ctx.obj["db"]
    service = PurchaseService(db)

    supplier_id = resolve_entity_or_exit(ctx, db.list_suppliers(), supplier, "supplier")
    total_amount = parse_money_or_exit(ctx, db, total, "total")
    paid_amount = parse_money_or_exit(ctx, db, paid, "paid amount") if paid is not None else total_amount
    discount_amount = parse_money_or_exit(ctx, db, discount, "discount")
    subtotal_amount = parse_money_or_exit(ctx, db, subtotal, "subtotal") if subtotal is not None else None
    date = _parse_date_or_exit(ctx, date_str)

    _warn_if_no_session(db)
    try:
        invoice_id = service.record_purchase(
            supplier_id=supplier_id,
            total_amount=total_amount,
            paid_amount=paid_amount,
            payment_method=PaymentMethod(method),
            subtotal=subtotal_amount,
            discount_amount=discount_amount,
            date=date,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded purchase of {money(db, total_amount)} (ID: {invoice_id})")


@click.command("payment")
@click.argument("entity_type", metavar="customer|supplier", type=click.Choice([t.value for t in EntityType]))
@click.argument("entity", metavar="NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option("--refund", is_flag=True, help="Record a refund instead of a payment")
@click.option("--method", type=click.Choice(PAYMENT_METHODS), default="cash", show_default=True, help="Tender used")
@click.option("--reference", help="Receipt or check number")
@click.option("--date", "date_str", help="Payment time (defaults to now)")
@click.option("--notes", help="Optional notes")
@click.pass_context
def payment(
    ctx,
    entity_type: str,
    entity: str,
    amount: str,
    refund: bool,
    method: str,
    reference: str | None,
    date_str: str | None,
    notes: str | None,
):
    """Record a payment with a customer or supplier.

    A customer payment is money received; a supplier payment is money paid
    out. --refund reverses the direction.

    Examples:
        tillbook payment customer "Alice Martin" 40
        tillbook payment supplier "Fresh Farms" 150 --method transfer
        tillbook payment customer 1 10 --refund
    """
    db = ctx.obj["db"]
    service = PaymentService(db)

    kind = EntityType(entity_type)
    candidates = db.list_customers() if kind == EntityType.CUSTOMER else db.list_suppliers()
    entity_id = resolve_entity_or_exit(ctx, candidates, entity, kind.value)
    value = parse_money_or_exit(ctx, db, amount)
    date = _parse_date_or_exit(ctx, date_str)
    transaction_type = PaymentTransactionType.REFUND if refund else PaymentTransactionType.PAYMENT

    _warn_if_no_session(db)
    try:
        payment_id = service.record_payment(
            entity_type=kind,
            entity_id=entity_id,
            amount=value,
            payment_method=PaymentMethod(method),
            transaction_type=transaction_type,
            date=date,
            reference=reference,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded {kind.value} {transaction_type.value} of {money(db, value)} (ID: {payment_id})")


@click.command("expense")
@click.argument("description", metavar="DESCRIPTION")
@click.argument("amount", metavar="AMOUNT")
@click.option("--category", required=True, help="Expense category, e.g. Rent or Utilities")
@click.option("--method", type=click.Choice(PAYMENT_METHODS), default="cash", show_default=True, help="Tender used")
@click.option("--reference", help="Receipt or invoice number")
@click.option("--date", "date_str", help="Expense time (defaults to now)")
@click.option("--notes", help="Optional notes")
@click.pass_context
def expense(
    ctx,
    description: str,
    amount: str,
    category: str,
    method: str,
    reference: str | None,
    date_str: str | None,
    notes: str | None,
):
    """Record an expense.

    Examples:
        tillbook expense "Cleaning supplies" 12.80 --category Supplies
        tillbook expense "Electricity" 140 --category Utilities --method transfer
    """
    db = ctx.obj["db"]
    service = ExpenseService(db)

    value = parse_money_or_exit(ctx, db, amount)
    date = _parse_date_or_exit(ctx, date_str)

    _warn_if_no_session(db)
    try:
        expense_id = service.record_expense(
            description=description,
            category=category,
            amount=value,
            payment_method=PaymentMethod(method),
            date=date,
            reference=reference,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded expense of {money(db, value)} (ID: {expense_id})")


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(sale)
    cli.add_command(purchase)
    cli.add_command(payment)
    cli.add_command(expense)
