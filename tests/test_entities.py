"""Tests for domain entities."""

import pytest
from datetime import datetime, UTC

from tillbook.domain.entities import (
    CashRegisterSession,
    EntityType,
    Payment,
    PaymentMethod,
    PaymentTransactionType,
    SessionStatus,
    SessionSummary,
    TransactionType,
)


class TestCashRegisterSession:
    """Tests for CashRegisterSession entity."""

    def test_open_session_defaults(self, session_entity):
        assert session_entity.is_open
        assert session_entity.closed_at is None
        assert session_entity.difference is None

    def test_session_immutability(self, session_entity):
        """Test that session entities are immutable."""
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            session_entity.status = SessionStatus.CLOSED

    def test_closed_session_is_not_open(self):
        session = CashRegisterSession(
            id=2,
            session_number="CR000002",
            status=SessionStatus.CLOSED,
            opening_balance=0,
            opened_at=datetime.now(UTC),
            opened_by="tester",
            difference=0,
        )
        assert not session.is_open


class TestPayment:
    """Tests for Payment entity."""

    def test_is_refund(self):
        payment = Payment(
            id=1,
            entity_type=EntityType.SUPPLIER,
            entity_id=1,
            amount=100,
            transaction_type=PaymentTransactionType.REFUND,
            date=datetime.now(UTC),
            payment_method=PaymentMethod.CASH,
            cash_register_session_id=None,
        )
        assert payment.is_refund
        assert payment.reference is None


class TestEnums:
    """Tests for stored enum values."""

    def test_enums_compare_to_stored_text(self):
        assert PaymentMethod.CASH == "cash"
        assert TransactionType("customer_payment") == TransactionType.CUSTOMER_PAYMENT
        assert EntityType("supplier") == EntityType.SUPPLIER

    def test_summary_transaction_count(self):
        summary = SessionSummary(sales_count=2, payments_count=1, purchases_count=0, expenses_count=3)
        assert summary.transaction_count == 6
        assert SessionSummary().transaction_count == 0
