"""Cash register session domain service."""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from tillbook.database.base import Database
from tillbook.domain import errors, ledger
from tillbook.domain.entities import (
    CashRegisterSession,
    DiscrepancyStatus,
    EntityType,
    SessionReport,
    Transaction,
    TransactionType,
)
from tillbook.domain.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def format_session_number(sequence: int) -> str:
    """Return the human-readable number of the n-th session, e.g. CR000001."""
    return f"CR{sequence:06d}"


class CashRegisterService:
    """Service for opening, reconciling and closing cash register sessions."""

    def __init__(self, db: Database):
        """Initialize cash register service.

        Args:
            db: Database instance
        """
        self.db = db

    def find_open_session(self) -> Optional[CashRegisterSession]:
        """Return the open session, or None if the register is closed."""
        return self.db.get_open_session()

    def get_session(self, session_id: int) -> CashRegisterSession:
        """Get session by ID.

        Raises:
            NotFoundError: If the session does not exist
        """
        session = self.db.get_session(session_id)
        if session is None:
            raise NotFoundError(errors.session_not_found(session_id))
        return session

    def list_sessions(self) -> list[CashRegisterSession]:
        """List sessions, most recently opened first."""
        return self.db.list_sessions()

    def open_session(
        self,
        opening_balance: int,
        opened_by: str,
        notes: Optional[str] = None,
        opened_at: Optional[datetime] = None,
    ) -> CashRegisterSession:
        """Open a new session with the counted opening cash.

        Args:
            opening_balance: Cash in the drawer at opening, in minor units
            opened_by: Operator opening the register
            notes: Optional notes
            opened_at: Optional opening time (defaults to now)

        Returns:
            The new open session

        Raises:
            ValidationError: If the opening balance is negative
            ConflictError: If another session is still open
        """
        if opening_balance < 0:
            raise ValidationError("Opening balance cannot be negative")

        current = self.db.get_open_session()
        if current is not None:
            raise ConflictError(errors.session_already_open(current.session_number))

        session_number = format_session_number(self.db.count_sessions() + 1)
        session_id = self.db.create_session(
            session_number=session_number,
            opening_balance=opening_balance,
            opened_by=opened_by,
            opened_at=opened_at,
            notes=notes,
        )
        logger.info("Opened session %s with %d", session_number, opening_balance)
        return self.get_session(session_id)

    def _counterparty_names(self, payments, sales, purchases) -> dict[tuple[EntityType, int], str]:
        names: dict[tuple[EntityType, int], str] = {}
        customer_ids = {p.entity_id for p in payments if p.entity_type == EntityType.CUSTOMER}
        customer_ids |= {s.customer_id for s in sales if s.customer_id is not None}
        supplier_ids = {p.entity_id for p in payments if p.entity_type == EntityType.SUPPLIER}
        supplier_ids |= {p.supplier_id for p in purchases}

        # Only fetch entities that are actually referenced
        if customer_ids:
            for customer in self.db.list_customers():
                if customer.id in customer_ids:
                    names[(EntityType.CUSTOMER, customer.id)] = customer.name
        if supplier_ids:
            for supplier in self.db.list_suppliers():
                if supplier.id in supplier_ids:
                    names[(EntityType.SUPPLIER, supplier.id)] = supplier.name
        return names

    def build_ledger(self, session: CashRegisterSession) -> list[Transaction]:
        """Load a session's records and return its full, sorted ledger."""
        sales = self.db.list_sales(session_id=session.id)
        payments = self.db.list_payments(session_id=session.id)
        purchases = self.db.list_purchase_invoices(session_id=session.id)
        expenses = self.db.list_expenses(session_id=session.id)

        transactions = ledger.build_session_ledger(
            session,
            sales=sales,
            payments=payments,
            purchases=purchases,
            expenses=expenses,
            counterparties=self._counterparty_names(payments, sales, purchases),
        )
        return ledger.sort_ledger(transactions)

    def compute_expected_balance(self, session: CashRegisterSession) -> int:
        """Return the cash the session's till should hold right now."""
        return ledger.expected_balance(session.opening_balance, self.build_ledger(session))

    def get_session_report(
        self,
        session_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        types: Optional[Iterable[TransactionType]] = None,
    ) -> SessionReport:
        """Build the ledger view of a session.

        The expected balance and the summary always cover every transaction
        of the session; the date and type filters only narrow the rows.

        Args:
            session_id: Session ID
            start_date: Optional first day to show
            end_date: Optional last day to show
            types: Optional transaction types to show

        Returns:
            SessionReport with running-balance rows
        """
        session = self.get_session(session_id)
        full = self.build_ledger(session)
        expected = ledger.expected_balance(session.opening_balance, full)

        filtered = start_date is not None or end_date is not None or types is not None
        shown = ledger.filter_transactions(full, start_date, end_date, types) if filtered else full

        return SessionReport(
            session=session,
            rows=tuple(ledger.running_balances(session.opening_balance, shown)),
            expected_balance=expected,
            summary=ledger.summarize_ledger(full),
            filtered=filtered,
        )

    def close_session(
        self,
        session_id: int,
        actual_balance: int,
        notes: Optional[str] = None,
        closed_by: Optional[str] = None,
    ) -> CashRegisterSession:
        """Close a session with the physically counted cash.

        Args:
            session_id: Session ID
            actual_balance: Counted cash in minor units
            notes: Optional closing notes
            closed_by: Operator closing the register

        Returns:
            The closed session

        Raises:
            NotFoundError: If the session does not exist
            InvalidStateError: If the session is not open
            ValidationError: If the counted balance is negative
        """
        if actual_balance < 0:
            raise ValidationError("Actual balance cannot be negative")

        session = self.get_session(session_id)
        if not session.is_open:
            raise InvalidStateError(errors.session_not_open(session.session_number, session.status.value))

        expected = self.compute_expected_balance(session)
        closed = ledger.close_session(
            session,
            actual_balance=actual_balance,
            expected=expected,
            notes=notes,
            closed_by=closed_by,
        )

        if not self.db.save_closed_session(closed):
            # Closed by someone else between our read and write
            current = self.get_session(session_id)
            raise InvalidStateError(errors.session_not_open(current.session_number, current.status.value))

        status = ledger.classify_discrepancy(closed.difference)
        if status == DiscrepancyStatus.BALANCED:
            logger.info("Closed session %s balanced at %d", closed.session_number, actual_balance)
        else:
            logger.warning(
                "Closed session %s with %s of %d (expected %d, counted %d)",
                closed.session_number,
                status.value,
                closed.difference,
                expected,
                actual_balance,
            )
        return self.get_session(session_id)

    def update_opened_at(self, session_id: int, opened_at: datetime) -> None:
        """Correct the opening time of a session.

        Raises:
            NotFoundError: If the session does not exist
        """
        self.get_session(session_id)
        self.db.update_session_opened_at(session_id, opened_at)
