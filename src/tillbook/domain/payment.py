"""Customer and supplier payment domain service."""

import logging
from datetime import datetime
from typing import Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.entities import EntityType, Payment, PaymentMethod, PaymentTransactionType
from tillbook.domain.entity_ledger import ENTITY_SIGNS
from tillbook.domain.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for recording payments and refunds with customers and suppliers."""

    def __init__(self, db: Database):
        """Initialize payment service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_payment(
        self,
        entity_type: EntityType,
        entity_id: int,
        amount: int,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        transaction_type: PaymentTransactionType = PaymentTransactionType.PAYMENT,
        date: Optional[datetime] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record a payment or refund against the open cash register session.

        Payments reduce the stored balance of the customer or supplier,
        refunds increase it.

        Args:
            entity_type: EntityType.CUSTOMER or EntityType.SUPPLIER
            entity_id: Customer or supplier ID
            amount: Positive amount in minor units
            payment_method: Tender used
            transaction_type: Payment or refund
            date: Payment time (defaults to now)
            reference: Optional external reference (receipt or check number)
            notes: Optional notes

        Returns:
            Payment ID

        Raises:
            ValidationError: If the amount is not positive
            NotFoundError: If the customer or supplier does not exist
        """
        entity_type = EntityType(entity_type)
        transaction_type = PaymentTransactionType(transaction_type)
        if amount <= 0:
            raise ValidationError("Payment amount must be positive")

        if entity_type == EntityType.CUSTOMER:
            entity = self.db.get_customer(entity_id)
        else:
            entity = self.db.get_supplier(entity_id)
        if entity is None:
            raise NotFoundError(errors.entity_not_found(entity_type.value, entity_id))

        session = self.db.get_open_session()
        payment_id = self.db.create_payment(
            balance_change=ENTITY_SIGNS[(entity_type, transaction_type)] * amount,
            entity_type=entity_type,
            entity_id=entity_id,
            amount=amount,
            transaction_type=transaction_type,
            date=date or datetime.now().replace(microsecond=0),
            payment_method=PaymentMethod(payment_method),
            reference=reference,
            notes=notes,
            cash_register_session_id=session.id if session is not None else None,
        )

        if session is None:
            logger.warning("Payment %d recorded with no open cash register session", payment_id)
        return payment_id

    def list_payments(
        self, entity_type: Optional[EntityType] = None, entity_id: Optional[int] = None
    ) -> list[Payment]:
        """List payments, optionally for one customer or supplier."""
        return self.db.list_payments(entity_type=entity_type, entity_id=entity_id)
