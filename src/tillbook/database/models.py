"""SQLAlchemy models for tillbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _local_now() -> datetime:
    # Business times are naive local time, the same clock as --date input
    return datetime.now().replace(microsecond=0)


class Customer(Base):
    """Customer model. Balance is in minor units; positive means they owe us."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    balance = Column(Integer, default=0, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    sales = relationship("Sale", back_populates="customer")


class Supplier(Base):
    """Supplier model. Balance is in minor units; positive means we owe them."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    balance = Column(Integer, default=0, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    purchase_invoices = relationship("PurchaseInvoice", back_populates="supplier")


class CashRegisterSession(Base):
    """Cash register session model."""

    __tablename__ = "cash_register_sessions"

    id = Column(Integer, primary_key=True)
    session_number = Column(String, unique=True, nullable=False)
    status = Column(String, default="open", nullable=False)
    opened_at = Column(DateTime, default=_local_now, nullable=False)
    closed_at = Column(DateTime, nullable=True)
    opened_by = Column(String, nullable=False)
    closed_by = Column(String, nullable=True)

    opening_balance = Column(Integer, nullable=False)
    closing_balance = Column(Integer, nullable=True)
    expected_balance = Column(Integer, nullable=True)
    actual_balance = Column(Integer, nullable=True)
    difference = Column(Integer, nullable=True)

    notes = Column(String, nullable=True)


class Sale(Base):
    """Sale model."""

    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    sale_number = Column(String, unique=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    date = Column(DateTime, default=_local_now, nullable=False)

    subtotal = Column(Integer, nullable=False)
    discount_amount = Column(Integer, default=0, nullable=False)
    total_amount = Column(Integer, nullable=False)
    paid_amount = Column(Integer, default=0, nullable=False)
    balance_impact = Column(Integer, nullable=False)

    payment_type = Column(String, nullable=False)
    payment_method = Column(String, nullable=False)
    cash_register_session_id = Column(Integer, ForeignKey("cash_register_sessions.id"), nullable=True)
    notes = Column(String, nullable=True)

    # Relationships
    customer = relationship("Customer", back_populates="sales")


class PurchaseInvoice(Base):
    """Purchase invoice model."""

    __tablename__ = "purchase_invoices"

    id = Column(Integer, primary_key=True)
    invoice_number = Column(String, unique=True, nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False)
    date = Column(DateTime, default=_local_now, nullable=False)

    subtotal = Column(Integer, nullable=False)
    discount_amount = Column(Integer, default=0, nullable=False)
    total_amount = Column(Integer, nullable=False)
    paid_amount = Column(Integer, default=0, nullable=False)
    balance_impact = Column(Integer, nullable=False)

    payment_type = Column(String, nullable=False)
    payment_method = Column(String, default="cash", nullable=False)
    cash_register_session_id = Column(Integer, ForeignKey("cash_register_sessions.id"), nullable=True)
    notes = Column(String, nullable=True)

    # Relationships
    supplier = relationship("Supplier", back_populates="purchase_invoices")


class Payment(Base):
    """Standalone customer or supplier payment model."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    entity_type = Column(String, nullable=False)
    entity_id = Column(Integer, nullable=False)
    amount = Column(Integer, nullable=False)
    transaction_type = Column(String, default="payment", nullable=False)
    date = Column(DateTime, default=_local_now, nullable=False)
    payment_method = Column(String, nullable=False)
    reference = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    cash_register_session_id = Column(Integer, ForeignKey("cash_register_sessions.id"), nullable=True)


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    date = Column(DateTime, default=_local_now, nullable=False)
    payment_method = Column(String, nullable=False)
    reference = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    cash_register_session_id = Column(Integer, ForeignKey("cash_register_sessions.id"), nullable=True)


class Currency(Base):
    """Currency model. Exchange rate is scaled by 10,000 (10000 = 1.0000)."""

    __tablename__ = "currencies"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    symbol = Column(String, nullable=False)
    exchange_rate = Column(Integer, default=10000, nullable=False)
    decimals = Column(Integer, default=2, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
