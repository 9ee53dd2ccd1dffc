"""Customer domain service."""

from typing import Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.entities import Customer, EntityLedgerEntry, EntityType
from tillbook.domain.entity_ledger import build_entity_ledger, current_balance
from tillbook.domain.errors import DataIntegrityError, NotFoundError, ValidationError


class CustomerService:
    """Service for managing customers and their balance ledgers."""

    def __init__(self, db: Database):
        """Initialize customer service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_customer(
        self,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a customer with a zero balance.

        Returns:
            Customer ID

        Raises:
            ValidationError: If the name is empty
        """
        if not name or not name.strip():
            raise ValidationError("Customer name cannot be empty")
        return self.db.create_customer(
            name=name.strip(), phone=phone, email=email, address=address, notes=notes
        )

    def get_customer(self, customer_id: int) -> Customer:
        """Get customer by ID.

        Raises:
            NotFoundError: If the customer does not exist
        """
        customer = self.db.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(errors.entity_not_found("customer", customer_id))
        return customer

    def list_customers(self) -> list[Customer]:
        """List all customers."""
        return self.db.list_customers()

    def get_ledger(self, customer_id: int) -> list[EntityLedgerEntry]:
        """Build the chronological balance ledger of a customer."""
        self.get_customer(customer_id)
        return build_entity_ledger(
            EntityType.CUSTOMER,
            customer_id,
            invoices=self.db.list_sales(customer_id=customer_id),
            payments=self.db.list_payments(entity_type=EntityType.CUSTOMER, entity_id=customer_id),
        )

    def verify_balance(self, customer_id: int) -> int:
        """Check the stored balance against the ledger.

        Returns:
            The balance both agree on

        Raises:
            DataIntegrityError: If they disagree
        """
        customer = self.get_customer(customer_id)
        computed = current_balance(self.get_ledger(customer_id))
        if computed != customer.balance:
            raise DataIntegrityError(
                errors.balance_mismatch("customer", customer_id, customer.balance, computed)
            )
        return computed
