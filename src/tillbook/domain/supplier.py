"""Supplier domain service."""

from typing import Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.entities import Supplier, EntityLedgerEntry, EntityType
from tillbook.domain.entity_ledger import build_entity_ledger, current_balance
from tillbook.domain.errors import DataIntegrityError, NotFoundError, ValidationError


class SupplierService:
    """Service for managing suppliers and their balance ledgers."""

    def __init__(self, db: Database):
        """Initialize supplier service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_supplier(
        self,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a supplier with a zero balance.

        Returns:
            Supplier ID

        Raises:
            ValidationError: If the name is empty
        """
        if not name or not name.strip():
            raise ValidationError("Supplier name cannot be empty")
        return self.db.create_supplier(
            name=name.strip(), phone=phone, email=email, address=address, notes=notes
        )

    def get_supplier(self, supplier_id: int) -> Supplier:
        """Get supplier by ID.

        Raises:
            NotFoundError: If the supplier does not exist
        """
        supplier = self.db.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError(errors.entity_not_found("supplier", supplier_id))
        return supplier

    def list_suppliers(self) -> list[Supplier]:
        """List all suppliers."""
        return self.db.list_suppliers()

    def get_ledger(self, supplier_id: int) -> list[EntityLedgerEntry]:
        """Build the chronological balance ledger of a supplier."""
        self.get_supplier(supplier_id)
        return build_entity_ledger(
            EntityType.SUPPLIER,
            supplier_id,
            invoices=self.db.list_purchase_invoices(supplier_id=supplier_id),
            payments=self.db.list_payments(entity_type=EntityType.SUPPLIER, entity_id=supplier_id),
        )

    def verify_balance(self, supplier_id: int) -> int:
        """Check the stored balance against the ledger.

        Returns:
            The balance both agree on

        Raises:
            DataIntegrityError: If they disagree
        """
        supplier = self.get_supplier(supplier_id)
        computed = current_balance(self.get_ledger(supplier_id))
        if computed != supplier.balance:
            raise DataIntegrityError(
                errors.balance_mismatch("supplier", supplier_id, supplier.balance, computed)
            )
        return computed
