"""Domain model entities for tillbook.

These are pure data classes representing business concepts, independent of
database schema. Monetary amounts are integers in the minor unit of the
default currency ("cents").
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class SessionStatus(str, Enum):
    """Lifecycle status of a cash register session."""

    OPEN = "open"
    CLOSED = "closed"


class EntityType(str, Enum):
    """Direction of a counterparty relationship."""

    CUSTOMER = "customer"
    SUPPLIER = "supplier"


class PaymentTransactionType(str, Enum):
    """Whether money moved as a payment or was given back as a refund."""

    PAYMENT = "payment"
    REFUND = "refund"


class PaymentMethod(str, Enum):
    """Tender used for a sale, payment, purchase or expense."""

    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    CHECK = "check"


class PaymentStatus(str, Enum):
    """How much of an invoice was paid at the time it was recorded."""

    FULL = "full"
    PARTIAL = "partial"
    CREDIT = "credit"


class TransactionType(str, Enum):
    """Kinds of entries in a cash register session ledger."""

    OPENING = "opening"
    SALE = "sale"
    CUSTOMER_PAYMENT = "customer_payment"
    SUPPLIER_PAYMENT = "supplier_payment"
    PURCHASE = "purchase"
    EXPENSE = "expense"


class DiscrepancyStatus(str, Enum):
    """Classification of a closed session's difference."""

    BALANCED = "balanced"
    SURPLUS = "surplus"
    SHORTAGE = "shortage"


@dataclass(frozen=True)
class Customer:
    """Customer domain entity. A positive balance means they owe us."""

    id: int
    name: str
    phone: Optional[str]
    email: Optional[str]
    address: Optional[str]
    balance: int
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Supplier:
    """Supplier domain entity. A positive balance means we owe them."""

    id: int
    name: str
    phone: Optional[str]
    email: Optional[str]
    address: Optional[str]
    balance: int
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class CashRegisterSession:
    """One open/close cycle of a physical cash drawer."""

    id: int
    session_number: str
    status: SessionStatus
    opening_balance: int
    opened_at: datetime
    opened_by: str
    expected_balance: Optional[int] = None
    actual_balance: Optional[int] = None
    closing_balance: Optional[int] = None
    difference: Optional[int] = None
    closed_at: Optional[datetime] = None
    closed_by: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status == SessionStatus.OPEN


@dataclass(frozen=True)
class Sale:
    """Sale domain entity."""

    id: int
    sale_number: str
    customer_id: Optional[int]
    date: datetime
    subtotal: int
    discount_amount: int
    total_amount: int
    paid_amount: int
    balance_impact: int
    payment_type: PaymentStatus
    payment_method: PaymentMethod
    cash_register_session_id: Optional[int]
    notes: Optional[str] = None


@dataclass(frozen=True)
class PurchaseInvoice:
    """Purchase invoice domain entity."""

    id: int
    invoice_number: str
    supplier_id: int
    date: datetime
    subtotal: int
    discount_amount: int
    total_amount: int
    paid_amount: int
    balance_impact: int
    payment_type: PaymentStatus
    payment_method: PaymentMethod
    cash_register_session_id: Optional[int]
    notes: Optional[str] = None


@dataclass(frozen=True)
class Payment:
    """Standalone payment or refund exchanged with a customer or supplier."""

    id: int
    entity_type: EntityType
    entity_id: int
    amount: int
    transaction_type: PaymentTransactionType
    date: datetime
    payment_method: PaymentMethod
    cash_register_session_id: Optional[int]
    reference: Optional[str] = None
    notes: Optional[str] = None

    @property
    def is_refund(self) -> bool:
        return self.transaction_type == PaymentTransactionType.REFUND


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    description: str
    category: str
    amount: int
    date: datetime
    payment_method: PaymentMethod
    cash_register_session_id: Optional[int]
    reference: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Currency:
    """Currency with an exchange rate scaled by 10,000 against the default."""

    id: int
    code: str
    name: str
    symbol: str
    exchange_rate: int
    decimals: int
    is_default: bool


@dataclass(frozen=True)
class Transaction:
    """Normalized entry of a cash register session ledger.

    ``cash_amount`` is the signed movement of the physical till: positive
    for cash in, negative for cash out and zero for non-cash tender.
    """

    id: str
    type: TransactionType
    description: str
    amount: int
    cash_amount: int
    payment_method: Optional[PaymentMethod]
    timestamp: datetime
    counterparty: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class LedgerRow:
    """A session ledger transaction with the till balance after it."""

    transaction: Transaction
    balance: int


@dataclass(frozen=True)
class EntityLedgerEntry:
    """One line of a customer or supplier balance ledger."""

    id: str
    date: datetime
    type: str
    description: str
    debit: int
    credit: int
    running_balance: int
    reference_id: int


@dataclass(frozen=True)
class SessionSummary:
    """Per-type counts and cash totals for a session ledger."""

    sales_count: int = 0
    payments_count: int = 0
    purchases_count: int = 0
    expenses_count: int = 0
    sales_cash: int = 0
    payments_cash: int = 0
    purchases_cash: int = 0
    expenses_cash: int = 0

    @property
    def transaction_count(self) -> int:
        return self.sales_count + self.payments_count + self.purchases_count + self.expenses_count


@dataclass(frozen=True)
class SessionReport:
    """Everything needed to display a session: ledger rows and totals."""

    session: CashRegisterSession
    rows: tuple[LedgerRow, ...]
    expected_balance: int
    summary: SessionSummary
    filtered: bool = False
