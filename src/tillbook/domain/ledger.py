"""Cash register session ledger and reconciliation.

Pure functions that turn the sales, payments, purchases and expenses of one
cash register session into a single ledger of normalized transactions, and
fold that ledger into running till balances.
"""

import dataclasses
from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Sequence

from tillbook.domain import errors
from tillbook.domain.entities import (
    CashRegisterSession,
    DiscrepancyStatus,
    EntityType,
    Expense,
    LedgerRow,
    Payment,
    PaymentMethod,
    PaymentStatus,
    PaymentTransactionType,
    PurchaseInvoice,
    Sale,
    SessionStatus,
    SessionSummary,
    Transaction,
    TransactionType,
)
from tillbook.domain.errors import DataIntegrityError, InvalidStateError, ValidationError

# Till direction of a cash payment, keyed by who we exchange money with and
# whether it is a payment or a refund.
CASH_SIGNS: dict[tuple[EntityType, PaymentTransactionType], int] = {
    (EntityType.CUSTOMER, PaymentTransactionType.PAYMENT): 1,
    (EntityType.CUSTOMER, PaymentTransactionType.REFUND): -1,
    (EntityType.SUPPLIER, PaymentTransactionType.PAYMENT): -1,
    (EntityType.SUPPLIER, PaymentTransactionType.REFUND): 1,
}

PAYMENT_TRANSACTION_TYPES = {
    EntityType.CUSTOMER: TransactionType.CUSTOMER_PAYMENT,
    EntityType.SUPPLIER: TransactionType.SUPPLIER_PAYMENT,
}

UNKNOWN_COUNTERPARTY = "Unknown"


def cash_portion(amount: int, payment_method: Optional[str]) -> int:
    """Return the part of an amount tendered in cash."""
    return amount if payment_method == PaymentMethod.CASH else 0


def payment_cash_amount(payment: Payment) -> int:
    """Return the signed till movement caused by a payment or refund."""
    sign = CASH_SIGNS[(EntityType(payment.entity_type), PaymentTransactionType(payment.transaction_type))]
    return sign * cash_portion(payment.amount, payment.payment_method)


def opening_transaction(session: CashRegisterSession) -> Transaction:
    """Build the opening-balance marker for a session."""
    return Transaction(
        id=f"opening-{session.id}",
        type=TransactionType.OPENING,
        description=f"Opening balance {session.session_number}",
        amount=session.opening_balance,
        cash_amount=0,
        payment_method=PaymentMethod.CASH,
        timestamp=session.opened_at,
        note=session.notes,
    )


def _check_session(record_id: str, session: CashRegisterSession, found: Optional[int]) -> None:
    if found != session.id:
        raise DataIntegrityError(errors.record_session_mismatch(record_id, session.id, found))


def _payment_description(payment: Payment, counterparty: str) -> str:
    label = "Refund" if payment.is_refund else "Payment"
    if payment.entity_type == EntityType.CUSTOMER:
        direction = "to" if payment.is_refund else "from"
    else:
        direction = "from" if payment.is_refund else "to"
    return f"{label} {direction} {counterparty}"


def build_session_ledger(
    session: CashRegisterSession,
    sales: Iterable[Sale] = (),
    payments: Iterable[Payment] = (),
    purchases: Iterable[PurchaseInvoice] = (),
    expenses: Iterable[Expense] = (),
    counterparties: Optional[Mapping[tuple[EntityType, int], str]] = None,
) -> list[Transaction]:
    """Normalize the records of a session into ledger transactions.

    The result starts with the opening marker, followed by sales, payments,
    purchases and expenses in the order given. Use ``sort_ledger`` to put
    it in chronological order.

    Args:
        session: Session the records belong to
        sales: Sales recorded during the session
        payments: Customer and supplier payments recorded during the session
        purchases: Purchase invoices recorded during the session
        expenses: Expenses recorded during the session
        counterparties: Optional mapping of (entity type, id) to display name

    Returns:
        List of transactions, opening marker first

    Raises:
        DataIntegrityError: If a record belongs to another session
    """
    names = counterparties or {}
    ledger = [opening_transaction(session)]

    for sale in sales:
        record_id = f"sale-{sale.id}"
        _check_session(record_id, session, sale.cash_register_session_id)
        counterparty = None
        if sale.customer_id is not None:
            counterparty = names.get((EntityType.CUSTOMER, sale.customer_id), UNKNOWN_COUNTERPARTY)
        ledger.append(
            Transaction(
                id=record_id,
                type=TransactionType.SALE,
                description=f"Sale {sale.sale_number}",
                amount=sale.paid_amount,
                cash_amount=cash_portion(sale.paid_amount, sale.payment_method),
                payment_method=sale.payment_method,
                timestamp=sale.date,
                counterparty=counterparty,
                note=sale.notes,
            )
        )

    for payment in payments:
        record_id = f"payment-{payment.id}"
        _check_session(record_id, session, payment.cash_register_session_id)
        entity_type = EntityType(payment.entity_type)
        counterparty = names.get((entity_type, payment.entity_id), UNKNOWN_COUNTERPARTY)
        ledger.append(
            Transaction(
                id=record_id,
                type=PAYMENT_TRANSACTION_TYPES[entity_type],
                description=_payment_description(payment, counterparty),
                amount=payment.amount,
                cash_amount=payment_cash_amount(payment),
                payment_method=payment.payment_method,
                timestamp=payment.date,
                counterparty=counterparty,
                note=payment.notes,
            )
        )

    for purchase in purchases:
        record_id = f"purchase-{purchase.id}"
        _check_session(record_id, session, purchase.cash_register_session_id)
        counterparty = names.get((EntityType.SUPPLIER, purchase.supplier_id), UNKNOWN_COUNTERPARTY)
        ledger.append(
            Transaction(
                id=record_id,
                type=TransactionType.PURCHASE,
                description=f"Purchase {purchase.invoice_number}",
                amount=purchase.paid_amount,
                cash_amount=-cash_portion(purchase.paid_amount, purchase.payment_method),
                payment_method=purchase.payment_method,
                timestamp=purchase.date,
                counterparty=counterparty,
                note=purchase.notes,
            )
        )

    for expense in expenses:
        record_id = f"expense-{expense.id}"
        _check_session(record_id, session, expense.cash_register_session_id)
        ledger.append(
            Transaction(
                id=record_id,
                type=TransactionType.EXPENSE,
                description=f"Expense: {expense.category}",
                amount=expense.amount,
                cash_amount=-cash_portion(expense.amount, expense.payment_method),
                payment_method=expense.payment_method,
                timestamp=expense.date,
                note=expense.notes or expense.description,
            )
        )

    return ledger


def sort_ledger(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort transactions chronologically with the opening marker first.

    Ties keep their input order.
    """
    transactions = list(transactions)
    openings = [t for t in transactions if t.type == TransactionType.OPENING]
    movements = [t for t in transactions if t.type != TransactionType.OPENING]
    return openings + sorted(movements, key=lambda t: t.timestamp)


def filter_transactions(
    transactions: Iterable[Transaction],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    types: Optional[Iterable[TransactionType]] = None,
) -> list[Transaction]:
    """Filter ledger transactions for display.

    The opening marker is always kept. Date bounds are inclusive.

    Args:
        transactions: Ledger transactions
        start_date: Optional first day to include
        end_date: Optional last day to include
        types: Optional transaction types to include

    Returns:
        Filtered list, in input order
    """
    wanted = set(types) if types is not None else None
    result = []
    for txn in transactions:
        if txn.type == TransactionType.OPENING:
            result.append(txn)
            continue
        day = txn.timestamp.date()
        if start_date is not None and day < start_date:
            continue
        if end_date is not None and day > end_date:
            continue
        if wanted is not None and txn.type not in wanted:
            continue
        result.append(txn)
    return result


def running_balances(opening_balance: int, transactions: Sequence[Transaction]) -> list[LedgerRow]:
    """Fold transactions into the till balance after each one."""
    balance = opening_balance
    rows = []
    for txn in transactions:
        if txn.type != TransactionType.OPENING:
            balance += txn.cash_amount
        rows.append(LedgerRow(transaction=txn, balance=balance))
    return rows


def expected_balance(opening_balance: int, transactions: Sequence[Transaction]) -> int:
    """Return the cash the till should hold after all transactions.

    Pass the complete, unfiltered ledger of the session: the till holds all
    cash regardless of what a display filter hides.
    """
    rows = running_balances(opening_balance, transactions)
    if not rows:
        return opening_balance
    return rows[-1].balance


def summarize_ledger(transactions: Iterable[Transaction]) -> SessionSummary:
    """Count transactions and total their cash by type."""
    counts = {t: 0 for t in TransactionType}
    cash = {t: 0 for t in TransactionType}
    for txn in transactions:
        counts[txn.type] += 1
        cash[txn.type] += txn.cash_amount

    return SessionSummary(
        sales_count=counts[TransactionType.SALE],
        payments_count=counts[TransactionType.CUSTOMER_PAYMENT] + counts[TransactionType.SUPPLIER_PAYMENT],
        purchases_count=counts[TransactionType.PURCHASE],
        expenses_count=counts[TransactionType.EXPENSE],
        sales_cash=cash[TransactionType.SALE],
        payments_cash=cash[TransactionType.CUSTOMER_PAYMENT] + cash[TransactionType.SUPPLIER_PAYMENT],
        # Purchases and expenses are reported as positive cash paid out
        purchases_cash=-cash[TransactionType.PURCHASE],
        expenses_cash=-cash[TransactionType.EXPENSE],
    )


def close_session(
    session: CashRegisterSession,
    actual_balance: int,
    expected: int,
    notes: Optional[str] = None,
    closed_by: Optional[str] = None,
    closed_at: Optional[datetime] = None,
) -> CashRegisterSession:
    """Return the closed version of an open session.

    Args:
        session: Session to close
        actual_balance: Physically counted cash
        expected: Expected balance over the session's full ledger
        notes: Optional closing notes (existing notes are kept if None)
        closed_by: Operator closing the session
        closed_at: Close time, defaults to now

    Returns:
        New session entity with status closed and the difference fixed

    Raises:
        InvalidStateError: If the session is not open
    """
    if session.status != SessionStatus.OPEN:
        raise InvalidStateError(errors.session_not_open(session.session_number, session.status.value))

    return dataclasses.replace(
        session,
        status=SessionStatus.CLOSED,
        expected_balance=expected,
        actual_balance=actual_balance,
        closing_balance=actual_balance,
        difference=actual_balance - expected,
        closed_at=closed_at or datetime.now().replace(microsecond=0),
        closed_by=closed_by,
        notes=notes if notes is not None else session.notes,
    )


def classify_discrepancy(difference: int) -> DiscrepancyStatus:
    """Classify a session difference; no tolerance band is applied."""
    if difference == 0:
        return DiscrepancyStatus.BALANCED
    if difference > 0:
        return DiscrepancyStatus.SURPLUS
    return DiscrepancyStatus.SHORTAGE


def classify_payment_status(paid_amount: int, total_amount: int) -> PaymentStatus:
    """Classify how much of an invoice was paid when it was recorded.

    Raises:
        ValidationError: If either amount is negative
    """
    if paid_amount < 0 or total_amount < 0:
        raise ValidationError("Amounts cannot be negative")
    if paid_amount >= total_amount:
        return PaymentStatus.FULL
    if paid_amount == 0:
        return PaymentStatus.CREDIT
    return PaymentStatus.PARTIAL
