"""Sale domain service."""

import logging
from datetime import datetime
from typing import Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.entities import PaymentMethod, Sale
from tillbook.domain.errors import NotFoundError, ValidationError
from tillbook.domain.ledger import classify_payment_status

logger = logging.getLogger(__name__)


def validate_invoice_amounts(
    total_amount: int, paid_amount: int, subtotal: Optional[int], discount_amount: int
) -> int:
    """Validate invoice amounts and return the subtotal.

    Without a subtotal, it is derived as total plus discount.

    Raises:
        ValidationError: If an amount is negative, the subtotal and discount
            do not add up to the total, or more than the total was paid
    """
    if total_amount < 0 or paid_amount < 0 or discount_amount < 0:
        raise ValidationError("Amounts cannot be negative")
    if subtotal is None:
        subtotal = total_amount + discount_amount
    if subtotal - discount_amount != total_amount:
        raise ValidationError(
            f"Subtotal {subtotal} minus discount {discount_amount} does not equal total {total_amount}"
        )
    if paid_amount > total_amount:
        raise ValidationError(f"Paid amount {paid_amount} exceeds total {total_amount}")
    return subtotal


class SaleService:
    """Service for recording sales."""

    def __init__(self, db: Database):
        """Initialize sale service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_sale(
        self,
        total_amount: int,
        paid_amount: int,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        customer_id: Optional[int] = None,
        subtotal: Optional[int] = None,
        discount_amount: int = 0,
        date: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record a sale against the open cash register session.

        The unpaid part of the sale is added to the customer's balance. A
        sale recorded while no session is open belongs to no session.

        Args:
            total_amount: Amount due after discount
            paid_amount: Amount received at the time of sale
            payment_method: Tender used for the received amount
            customer_id: Optional customer ID (None for walk-in)
            subtotal: Optional amount before discount
            discount_amount: Discount granted
            date: Sale time (defaults to now)
            notes: Optional notes

        Returns:
            Sale ID

        Raises:
            ValidationError: If amounts are invalid or a walk-in sale is not fully paid
            NotFoundError: If the customer does not exist
        """
        subtotal = validate_invoice_amounts(total_amount, paid_amount, subtotal, discount_amount)
        balance_impact = total_amount - paid_amount

        if customer_id is None:
            if balance_impact > 0:
                raise ValidationError("Walk-in sales must be paid in full; select a customer for credit")
        elif self.db.get_customer(customer_id) is None:
            raise NotFoundError(errors.entity_not_found("customer", customer_id))

        session = self.db.get_open_session()
        sale_number = f"SALE{self.db.count_sales() + 1:06d}"

        sale_id = self.db.create_sale(
            balance_change=balance_impact,
            sale_number=sale_number,
            customer_id=customer_id,
            date=date or datetime.now().replace(microsecond=0),
            subtotal=subtotal,
            discount_amount=discount_amount,
            total_amount=total_amount,
            paid_amount=paid_amount,
            balance_impact=balance_impact,
            payment_type=classify_payment_status(paid_amount, total_amount),
            payment_method=PaymentMethod(payment_method),
            cash_register_session_id=session.id if session is not None else None,
            notes=notes,
        )

        if session is None:
            logger.warning("Sale %s recorded with no open cash register session", sale_number)
        return sale_id

    def list_sales(self, customer_id: Optional[int] = None) -> list[Sale]:
        """List sales, optionally for one customer."""
        return self.db.list_sales(customer_id=customer_id)
