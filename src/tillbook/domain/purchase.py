"""Purchase invoice domain service."""

import logging
from datetime import datetime
from typing import Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.entities import PaymentMethod, PurchaseInvoice
from tillbook.domain.errors import NotFoundError
from tillbook.domain.ledger import classify_payment_status
from tillbook.domain.sale import validate_invoice_amounts

logger = logging.getLogger(__name__)


class PurchaseService:
    """Service for recording purchase invoices from suppliers."""

    def __init__(self, db: Database):
        """Initialize purchase service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_purchase(
        self,
        supplier_id: int,
        total_amount: int,
        paid_amount: int,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        subtotal: Optional[int] = None,
        discount_amount: int = 0,
        date: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record a purchase invoice against the open cash register session.

        The unpaid part of the invoice is added to what we owe the supplier.

        Returns:
            Purchase invoice ID

        Raises:
            ValidationError: If amounts are invalid
            NotFoundError: If the supplier does not exist
        """
        subtotal = validate_invoice_amounts(total_amount, paid_amount, subtotal, discount_amount)
        if self.db.get_supplier(supplier_id) is None:
            raise NotFoundError(errors.entity_not_found("supplier", supplier_id))

        balance_impact = total_amount - paid_amount
        session = self.db.get_open_session()
        invoice_number = f"PUR{self.db.count_purchase_invoices() + 1:06d}"

        invoice_id = self.db.create_purchase_invoice(
            balance_change=balance_impact,
            invoice_number=invoice_number,
            supplier_id=supplier_id,
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
            logger.warning("Purchase %s recorded with no open cash register session", invoice_number)
        return invoice_id

    def list_purchases(self, supplier_id: Optional[int] = None) -> list[PurchaseInvoice]:
        """List purchase invoices, optionally for one supplier."""
        return self.db.list_purchase_invoices(supplier_id=supplier_id)
