"""Expense domain service."""

import logging
from datetime import datetime
from typing import Optional

from tillbook.database.base import Database
from tillbook.domain.entities import Expense, PaymentMethod
from tillbook.domain.errors import ValidationError

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for recording shop expenses."""

    def __init__(self, db: Database):
        self.db = db

    def record_expense(
        self,
        description: str,
        category: str,
        amount: int,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        date: Optional[datetime] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record an expense against the open cash register session.

        Returns:
            Expense ID

        Raises:
            ValidationError: If the amount is not positive or a field is empty
        """
        if amount <= 0:
            raise ValidationError("Expense amount must be positive")
        if not description or not description.strip():
            raise ValidationError("Expense description cannot be empty")
        if not category or not category.strip():
            raise ValidationError("Expense category cannot be empty")

        session = self.db.get_open_session()
        if session is None:
            logger.warning("Expense '%s' recorded with no open cash register session", description)
        return self.db.create_expense(
            description=description.strip(),
            category=category.strip(),
            amount=amount,
            date=date or datetime.now().replace(microsecond=0),
            payment_method=PaymentMethod(payment_method),
            reference=reference,
            notes=notes,
            cash_register_session_id=session.id if session is not None else None,
        )

    def list_expenses(self) -> list[Expense]:
        """List all expenses."""
        return self.db.list_expenses()
