"""Customer and supplier balance ledgers.

A ledger lists every invoice and payment exchanged with one customer or
supplier in date order, with the balance owed after each entry. Debits
increase what is owed, credits decrease it.
"""

from typing import Iterable, Sequence, Union

from tillbook.domain import errors
from tillbook.domain.entities import (
    EntityLedgerEntry,
    EntityType,
    Payment,
    PaymentMethod,
    PaymentTransactionType,
    PurchaseInvoice,
    Sale,
)
from tillbook.domain.errors import DataIntegrityError

Invoice = Union[Sale, PurchaseInvoice]

# Effect of a payment on the balance owed: +1 is a debit, -1 a credit.
ENTITY_SIGNS: dict[tuple[EntityType, PaymentTransactionType], int] = {
    (EntityType.CUSTOMER, PaymentTransactionType.PAYMENT): -1,
    (EntityType.CUSTOMER, PaymentTransactionType.REFUND): 1,
    (EntityType.SUPPLIER, PaymentTransactionType.PAYMENT): -1,
    (EntityType.SUPPLIER, PaymentTransactionType.REFUND): 1,
}


def payment_balance_change(payment: Payment) -> int:
    """Return the signed change a payment makes to the stored entity balance."""
    sign = ENTITY_SIGNS[(EntityType(payment.entity_type), PaymentTransactionType(payment.transaction_type))]
    return sign * payment.amount


def _invoice_entity_id(direction: EntityType, invoice: Invoice) -> int | None:
    if direction == EntityType.CUSTOMER:
        return getattr(invoice, "customer_id", None)
    return getattr(invoice, "supplier_id", None)


def _invoice_entries(direction: EntityType, invoice: Invoice) -> list[dict]:
    if direction == EntityType.CUSTOMER:
        kind, number = "sale", invoice.sale_number
        label = f"Sale {number}"
    else:
        kind, number = "purchase", invoice.invoice_number
        label = f"Purchase {number}"

    entries = [
        {
            "id": f"{kind}-{invoice.id}",
            "date": invoice.date,
            "type": kind,
            "description": label,
            "debit": invoice.total_amount,
            "credit": 0,
            "reference_id": invoice.id,
        }
    ]
    # Amount tendered with the invoice itself
    if invoice.paid_amount > 0:
        entries.append(
            {
                "id": f"{kind}-{invoice.id}-paid",
                "date": invoice.date,
                "type": "payment",
                "description": f"Paid with {number} - {PaymentMethod(invoice.payment_method).value}",
                "debit": 0,
                "credit": invoice.paid_amount,
                "reference_id": invoice.id,
            }
        )
    return entries


def _payment_entry(payment: Payment) -> dict:
    label = "Refund" if payment.is_refund else "Payment"
    description = f"{label} - {PaymentMethod(payment.payment_method).value}"
    if payment.reference:
        description += f" ({payment.reference})"

    change = payment_balance_change(payment)
    return {
        "id": f"payment-{payment.id}",
        "date": payment.date,
        "type": "payment",
        "description": description,
        "debit": change if change > 0 else 0,
        "credit": -change if change < 0 else 0,
        "reference_id": payment.id,
    }


def build_entity_ledger(
    direction: EntityType,
    entity_id: int,
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
) -> list[EntityLedgerEntry]:
    """Build the chronological balance ledger of a customer or supplier.

    Args:
        direction: EntityType.CUSTOMER (invoices are sales) or
            EntityType.SUPPLIER (invoices are purchase invoices)
        entity_id: ID of the customer or supplier
        invoices: All invoices of the entity
        payments: All payments and refunds of the entity

    Returns:
        Ledger entries in ascending date order with running balances

    Raises:
        DataIntegrityError: If a record references another entity
    """
    direction = EntityType(direction)
    raw: list[dict] = []

    for invoice in invoices:
        found = _invoice_entity_id(direction, invoice)
        if found != entity_id:
            raise DataIntegrityError(
                errors.record_entity_mismatch(f"invoice-{invoice.id}", direction.value, entity_id, found)
            )
        raw.extend(_invoice_entries(direction, invoice))

    for payment in payments:
        if payment.entity_type != direction or payment.entity_id != entity_id:
            raise DataIntegrityError(
                errors.record_entity_mismatch(
                    f"payment-{payment.id}", direction.value, entity_id, payment.entity_id
                )
            )
        raw.append(_payment_entry(payment))

    # Stable: entries on the same date keep their insertion order
    raw.sort(key=lambda entry: entry["date"])

    running_balance = 0
    ledger = []
    for entry in raw:
        running_balance += entry["debit"] - entry["credit"]
        ledger.append(EntityLedgerEntry(running_balance=running_balance, **entry))
    return ledger


def current_balance(entries: Sequence[EntityLedgerEntry]) -> int:
    """Return the balance after the last ledger entry, or 0 if empty."""
    if not entries:
        return 0
    return entries[-1].running_balance
