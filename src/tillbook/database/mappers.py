"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so text columns become domain
enums in one place.
"""

from tillbook.domain import entities as domain
from tillbook.database.models import (
    Customer as ORMCustomer,
    Supplier as ORMSupplier,
    CashRegisterSession as ORMCashRegisterSession,
    Sale as ORMSale,
    PurchaseInvoice as ORMPurchaseInvoice,
    Payment as ORMPayment,
    Expense as ORMExpense,
    Currency as ORMCurrency,
)


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        phone=orm_customer.phone,
        email=orm_customer.email,
        address=orm_customer.address,
        balance=orm_customer.balance or 0,
        notes=orm_customer.notes,
        created_at=orm_customer.created_at,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Supplier:
    """Convert SQLAlchemy Supplier model to domain Supplier entity."""
    return domain.Supplier(
        id=orm_supplier.id,
        name=orm_supplier.name,
        phone=orm_supplier.phone,
        email=orm_supplier.email,
        address=orm_supplier.address,
        balance=orm_supplier.balance or 0,
        notes=orm_supplier.notes,
        created_at=orm_supplier.created_at,
    )


def session_to_domain(orm_session: ORMCashRegisterSession) -> domain.CashRegisterSession:
    """Convert SQLAlchemy CashRegisterSession model to domain entity."""
    return domain.CashRegisterSession(
        id=orm_session.id,
        session_number=orm_session.session_number,
        status=domain.SessionStatus(orm_session.status),
        opening_balance=orm_session.opening_balance,
        opened_at=orm_session.opened_at,
        opened_by=orm_session.opened_by,
        expected_balance=orm_session.expected_balance,
        actual_balance=orm_session.actual_balance,
        closing_balance=orm_session.closing_balance,
        difference=orm_session.difference,
        closed_at=orm_session.closed_at,
        closed_by=orm_session.closed_by,
        notes=orm_session.notes,
    )


def sale_to_domain(orm_sale: ORMSale) -> domain.Sale:
    """Convert SQLAlchemy Sale model to domain Sale entity."""
    return domain.Sale(
        id=orm_sale.id,
        sale_number=orm_sale.sale_number,
        customer_id=orm_sale.customer_id,
        date=orm_sale.date,
        subtotal=orm_sale.subtotal,
        discount_amount=orm_sale.discount_amount or 0,
        total_amount=orm_sale.total_amount,
        paid_amount=orm_sale.paid_amount or 0,
        balance_impact=orm_sale.balance_impact,
        payment_type=domain.PaymentStatus(orm_sale.payment_type),
        payment_method=domain.PaymentMethod(orm_sale.payment_method),
        cash_register_session_id=orm_sale.cash_register_session_id,
        notes=orm_sale.notes,
    )


def purchase_invoice_to_domain(orm_invoice: ORMPurchaseInvoice) -> domain.PurchaseInvoice:
    """Convert SQLAlchemy PurchaseInvoice model to domain entity."""
    return domain.PurchaseInvoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        supplier_id=orm_invoice.supplier_id,
        date=orm_invoice.date,
        subtotal=orm_invoice.subtotal,
        discount_amount=orm_invoice.discount_amount or 0,
        total_amount=orm_invoice.total_amount,
        paid_amount=orm_invoice.paid_amount or 0,
        balance_impact=orm_invoice.balance_impact,
        payment_type=domain.PaymentStatus(orm_invoice.payment_type),
        payment_method=domain.PaymentMethod(orm_invoice.payment_method),
        cash_register_session_id=orm_invoice.cash_register_session_id,
        notes=orm_invoice.notes,
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        entity_type=domain.EntityType(orm_payment.entity_type),
        entity_id=orm_payment.entity_id,
        amount=orm_payment.amount,
        transaction_type=domain.PaymentTransactionType(orm_payment.transaction_type),
        date=orm_payment.date,
        payment_method=domain.PaymentMethod(orm_payment.payment_method),
        cash_register_session_id=orm_payment.cash_register_session_id,
        reference=orm_payment.reference,
        notes=orm_payment.notes,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        description=orm_expense.description,
        category=orm_expense.category,
        amount=orm_expense.amount,
        date=orm_expense.date,
        payment_method=domain.PaymentMethod(orm_expense.payment_method),
        cash_register_session_id=orm_expense.cash_register_session_id,
        reference=orm_expense.reference,
        notes=orm_expense.notes,
    )


def currency_to_domain(orm_currency: ORMCurrency) -> domain.Currency:
    """Convert SQLAlchemy Currency model to domain Currency entity."""
    return domain.Currency(
        id=orm_currency.id,
        code=orm_currency.code,
        name=orm_currency.name,
        symbol=orm_currency.symbol,
        exchange_rate=orm_currency.exchange_rate,
        decimals=orm_currency.decimals,
        is_default=bool(orm_currency.is_default),
    )
