"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime

# Import entities directly to avoid circular import through domain/__init__.py
from tillbook.domain.entities import (
    CashRegisterSession,
    Currency,
    Customer,
    EntityType,
    Expense,
    Payment,
    PurchaseInvoice,
    Sale,
    Supplier,
)


class Database(ABC):
    """Abstract database interface for tillbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Customer and supplier operations
    @abstractmethod
    def create_customer(
        self,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a customer. Returns customer ID."""
        pass

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def list_customers(self) -> list[Customer]:
        """List all customers."""
        pass

    @abstractmethod
    def create_supplier(
        self,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a supplier. Returns supplier ID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        """Get supplier by ID."""
        pass

    @abstractmethod
    def list_suppliers(self) -> list[Supplier]:
        """List all suppliers."""
        pass

    # Cash register session operations
    @abstractmethod
    def create_session(
        self,
        session_number: str,
        opening_balance: int,
        opened_by: str,
        opened_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an open cash register session. Returns session ID."""
        pass

    @abstractmethod
    def get_session(self, session_id: int) -> Optional[CashRegisterSession]:
        """Get session by ID."""
        pass

    @abstractmethod
    def get_open_session(self) -> Optional[CashRegisterSession]:
        """Get the session whose status is open, if any."""
        pass

    @abstractmethod
    def list_sessions(self) -> list[CashRegisterSession]:
        """List sessions, most recently opened first."""
        pass

    @abstractmethod
    def count_sessions(self) -> int:
        """Count all sessions ever opened."""
        pass

    @abstractmethod
    def save_closed_session(self, session: CashRegisterSession) -> bool:
        """Persist the closing fields of a session.

        The update only applies to a row that is still open. Returns False
        when no open row matched (someone else closed it first).
        """
        pass

    @abstractmethod
    def update_session_opened_at(self, session_id: int, opened_at: datetime) -> None:
        """Correct the opening time of a session."""
        pass

    # Record operations
    @abstractmethod
    def create_sale(self, balance_change: int = 0, **fields) -> int:
        """Create a sale from Sale entity fields (except id). Returns sale ID.

        balance_change is added to the customer's stored balance in the same
        transaction as the insert; neither is saved if either fails.
        """
        pass

    @abstractmethod
    def list_sales(
        self, customer_id: Optional[int] = None, session_id: Optional[int] = None
    ) -> list[Sale]:
        """List sales in creation order, optionally filtered."""
        pass

    @abstractmethod
    def count_sales(self) -> int:
        """Count all sales."""
        pass

    @abstractmethod
    def create_purchase_invoice(self, balance_change: int = 0, **fields) -> int:
        """Create a purchase invoice from entity fields. Returns invoice ID.

        balance_change is applied to the supplier's balance in the same transaction.
        """
        pass

    @abstractmethod
    def list_purchase_invoices(
        self, supplier_id: Optional[int] = None, session_id: Optional[int] = None
    ) -> list[PurchaseInvoice]:
        """List purchase invoices in creation order, optionally filtered."""
        pass

    @abstractmethod
    def count_purchase_invoices(self) -> int:
        """Count all purchase invoices."""
        pass

    @abstractmethod
    def create_payment(self, balance_change: int = 0, **fields) -> int:
        """Create a payment from Payment entity fields. Returns payment ID.

        balance_change is applied to the customer or supplier balance in the
        same transaction.
        """
        pass

    @abstractmethod
    def list_payments(
        self,
        entity_type: Optional[EntityType] = None,
        entity_id: Optional[int] = None,
        session_id: Optional[int] = None,
    ) -> list[Payment]:
        """List payments in creation order, optionally filtered."""
        pass

    @abstractmethod
    def create_expense(self, **fields) -> int:
        """Create an expense from Expense entity fields. Returns expense ID."""
        pass

    @abstractmethod
    def list_expenses(self, session_id: Optional[int] = None) -> list[Expense]:
        """List expenses in creation order, optionally filtered by session."""
        pass

    # Currency operations
    @abstractmethod
    def create_currency(
        self, code: str, name: str, symbol: str, exchange_rate: int, decimals: int
    ) -> int:
        """Create a non-default currency. Returns currency ID."""
        pass

    @abstractmethod
    def get_currency_by_code(self, code: str) -> Optional[Currency]:
        """Get currency by code."""
        pass

    @abstractmethod
    def list_currencies(self) -> list[Currency]:
        """List currencies ordered by code."""
        pass

    @abstractmethod
    def get_default_currency(self) -> Optional[Currency]:
        """Get the default currency."""
        pass

    @abstractmethod
    def set_default_currency(self, code: str) -> None:
        """Flag one currency as default and clear the flag on the others."""
        pass

    @abstractmethod
    def update_exchange_rate(self, code: str, exchange_rate: int) -> None:
        """Update a currency's exchange rate."""
        pass
