"""Shared pytest fixtures for tillbook tests."""

import tempfile
import os
from datetime import datetime
import pytest

from tillbook.database.factories import create_sqlite_database
from tillbook.domain.cash_register import CashRegisterService
from tillbook.domain.currency import CurrencyService
from tillbook.domain.customer import CustomerService
from tillbook.domain.entities import CashRegisterSession, SessionStatus
from tillbook.domain.expense import ExpenseService
from tillbook.domain.payment import PaymentService
from tillbook.domain.purchase import PurchaseService
from tillbook.domain.sale import SaleService
from tillbook.domain.supplier import SupplierService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def register_service(temp_db):
    """Create a CashRegisterService with a temporary database."""
    return CashRegisterService(temp_db)


@pytest.fixture
def customer_service(temp_db):
    """Create a CustomerService with a temporary database."""
    return CustomerService(temp_db)


@pytest.fixture
def supplier_service(temp_db):
    """Create a SupplierService with a temporary database."""
    return SupplierService(temp_db)


@pytest.fixture
def sale_service(temp_db):
    """Create a SaleService with a temporary database."""
    return SaleService(temp_db)


@pytest.fixture
def purchase_service(temp_db):
    """Create a PurchaseService with a temporary database."""
    return PurchaseService(temp_db)


@pytest.fixture
def payment_service(temp_db):
    """Create a PaymentService with a temporary database."""
    return PaymentService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def currency_service(temp_db):
    """Create a CurrencyService with a temporary database."""
    return CurrencyService(temp_db)


@pytest.fixture
def sample_customer(customer_service):
    """Create a sample customer for testing."""
    customer_id = customer_service.create_customer(name="Alice Martin", phone="555-0101")
    return customer_service.get_customer(customer_id)


@pytest.fixture
def sample_supplier(supplier_service):
    """Create a sample supplier for testing."""
    supplier_id = supplier_service.create_supplier(name="Fresh Farms")
    return supplier_service.get_supplier(supplier_id)


@pytest.fixture
def sample_currencies(currency_service):
    """Register USD (default) and EUR."""
    currency_service.create_currency(code="USD", name="US Dollar", symbol="$")
    currency_service.create_currency(code="EUR", name="Euro", symbol="€", exchange_rate=9200)
    return {c.code: c for c in currency_service.list_currencies()}


@pytest.fixture
def open_session(register_service):
    """Open a session with 100.00 in the drawer."""
    return register_service.open_session(opening_balance=10000, opened_by="tester")


@pytest.fixture
def session_entity():
    """An open session entity that is not stored anywhere."""
    return CashRegisterSession(
        id=1,
        session_number="CR000001",
        status=SessionStatus.OPEN,
        opening_balance=10000,
        opened_at=datetime(2024, 3, 1, 8, 0),
        opened_by="tester",
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
