"""Tests for recording sales, purchases, payments and expenses."""

import logging
import pytest
from datetime import datetime

from tillbook.domain.entities import (
    EntityType,
    PaymentMethod,
    PaymentStatus,
    PaymentTransactionType,
)
from tillbook.domain.errors import NotFoundError, ValidationError
from tillbook.domain.sale import validate_invoice_amounts


class TestValidateInvoiceAmounts:
    """Tests for invoice amount validation."""

    def test_derives_subtotal(self):
        assert validate_invoice_amounts(total_amount=900, paid_amount=0, subtotal=None, discount_amount=100) == 1000

    def test_accepts_consistent_subtotal(self):
        assert validate_invoice_amounts(total_amount=900, paid_amount=900, subtotal=1000, discount_amount=100) == 1000

    @pytest.mark.parametrize(
        "total,paid,subtotal,discount",
        [
            (-1, 0, None, 0),
            (100, -1, None, 0),
            (100, 0, None, -5),
            (100, 0, 150, 10),
            (100, 101, None, 0),
        ],
    )
    def test_rejects_invalid_amounts(self, total, paid, subtotal, discount):
        with pytest.raises(ValidationError):
            validate_invoice_amounts(total, paid, subtotal, discount)


class TestSaleService:
    """Tests for SaleService."""

    def test_cash_sale_in_open_session(self, sale_service, open_session, temp_db):
        sale_id = sale_service.record_sale(
            total_amount=5000, paid_amount=5000, date=datetime(2024, 3, 1, 9, 0), notes="Bread"
        )
        sales = sale_service.list_sales()

        assert len(sales) == 1
        sale = sales[0]
        assert sale.id == sale_id
        assert sale.sale_number == "SALE000001"
        assert sale.cash_register_session_id == open_session.id
        assert sale.payment_type == PaymentStatus.FULL
        assert sale.payment_method == PaymentMethod.CASH
        assert sale.balance_impact == 0
        assert sale.subtotal == 5000
        assert sale.date == datetime(2024, 3, 1, 9, 0)

    def test_credit_sale_raises_customer_balance(self, sale_service, customer_service, sample_customer, open_session):
        sale_service.record_sale(total_amount=8000, paid_amount=3000, customer_id=sample_customer.id)
        sale_service.record_sale(total_amount=2000, paid_amount=0, customer_id=sample_customer.id)

        sales = sale_service.list_sales(customer_id=sample_customer.id)
        assert [s.payment_type for s in sales] == [PaymentStatus.PARTIAL, PaymentStatus.CREDIT]
        assert [s.sale_number for s in sales] == ["SALE000001", "SALE000002"]
        assert customer_service.get_customer(sample_customer.id).balance == 7000
        assert customer_service.verify_balance(sample_customer.id) == 7000

    def test_walk_in_sale_must_be_paid(self, sale_service, open_session):
        with pytest.raises(ValidationError):
            sale_service.record_sale(total_amount=5000, paid_amount=1000)

    def test_unknown_customer(self, sale_service, open_session):
        with pytest.raises(NotFoundError):
            sale_service.record_sale(total_amount=5000, paid_amount=5000, customer_id=99)

    def test_sale_without_session(self, sale_service, caplog):
        with caplog.at_level(logging.WARNING, logger="tillbook.domain.sale"):
            sale_service.record_sale(total_amount=1000, paid_amount=1000)

        assert sale_service.list_sales()[0].cash_register_session_id is None
        assert "no open cash register session" in caplog.text

    def test_discounted_sale(self, sale_service, open_session):
        sale_service.record_sale(total_amount=900, paid_amount=900, discount_amount=100)
        sale = sale_service.list_sales()[0]
        assert sale.subtotal == 1000
        assert sale.discount_amount == 100


class TestPurchaseService:
    """Tests for PurchaseService."""

    def test_purchase_on_credit(self, purchase_service, supplier_service, sample_supplier, open_session):
        purchase_service.record_purchase(
            sample_supplier.id, total_amount=50000, paid_amount=10000, payment_method=PaymentMethod.TRANSFER
        )

        invoice = purchase_service.list_purchases(supplier_id=sample_supplier.id)[0]
        assert invoice.invoice_number == "PUR000001"
        assert invoice.payment_type == PaymentStatus.PARTIAL
        assert invoice.payment_method == PaymentMethod.TRANSFER
        assert invoice.cash_register_session_id == open_session.id
        assert supplier_service.get_supplier(sample_supplier.id).balance == 40000
        assert supplier_service.verify_balance(sample_supplier.id) == 40000

    def test_unknown_supplier(self, purchase_service):
        with pytest.raises(NotFoundError):
            purchase_service.record_purchase(7, total_amount=100, paid_amount=100)

    def test_overpaid_purchase(self, purchase_service, sample_supplier):
        with pytest.raises(ValidationError):
            purchase_service.record_purchase(sample_supplier.id, total_amount=100, paid_amount=200)


class TestPaymentService:
    """Tests for PaymentService."""

    def test_customer_payment_reduces_balance(
        self, payment_service, sale_service, customer_service, sample_customer, open_session
    ):
        sale_service.record_sale(total_amount=20000, paid_amount=0, customer_id=sample_customer.id)
        payment_service.record_payment(EntityType.CUSTOMER, sample_customer.id, 15000, reference="R-1")

        assert customer_service.get_customer(sample_customer.id).balance == 5000
        entries = customer_service.get_ledger(sample_customer.id)
        assert [(e.debit, e.credit, e.running_balance) for e in entries] == [
            (20000, 0, 20000),
            (0, 15000, 5000),
        ]

    def test_refunds_increase_balance(
        self, payment_service, customer_service, supplier_service, sample_customer, sample_supplier
    ):
        payment_service.record_payment(
            EntityType.CUSTOMER, sample_customer.id, 500, transaction_type=PaymentTransactionType.REFUND
        )
        payment_service.record_payment(
            EntityType.SUPPLIER, sample_supplier.id, 700, transaction_type=PaymentTransactionType.REFUND
        )

        assert customer_service.get_customer(sample_customer.id).balance == 500
        assert supplier_service.get_supplier(sample_supplier.id).balance == 700
        assert customer_service.verify_balance(sample_customer.id) == 500
        assert supplier_service.verify_balance(sample_supplier.id) == 700

    def test_list_payments_by_entity(self, payment_service, sample_customer, sample_supplier, open_session):
        payment_service.record_payment(EntityType.CUSTOMER, sample_customer.id, 100)
        payment_service.record_payment(EntityType.SUPPLIER, sample_supplier.id, 200, payment_method=PaymentMethod.CHECK)

        supplier_payments = payment_service.list_payments(EntityType.SUPPLIER, sample_supplier.id)
        assert len(supplier_payments) == 1
        assert supplier_payments[0].amount == 200
        assert supplier_payments[0].payment_method == PaymentMethod.CHECK
        assert supplier_payments[0].cash_register_session_id == open_session.id
        assert len(payment_service.list_payments()) == 2

    @pytest.mark.parametrize("amount", [0, -100])
    def test_amount_must_be_positive(self, payment_service, sample_customer, amount):
        with pytest.raises(ValidationError):
            payment_service.record_payment(EntityType.CUSTOMER, sample_customer.id, amount)

    def test_unknown_entity(self, payment_service):
        with pytest.raises(NotFoundError):
            payment_service.record_payment(EntityType.SUPPLIER, 3, 100)


class TestExpenseService:
    """Tests for ExpenseService."""

    def test_record_expense(self, expense_service, open_session):
        expense_service.record_expense(
            description=" Electricity ", category="Utilities", amount=14000,
            payment_method=PaymentMethod.TRANSFER, reference="INV-9",
        )

        expense = expense_service.list_expenses()[0]
        assert expense.description == "Electricity"
        assert expense.category == "Utilities"
        assert expense.payment_method == PaymentMethod.TRANSFER
        assert expense.reference == "INV-9"
        assert expense.cash_register_session_id == open_session.id

    @pytest.mark.parametrize(
        "description,category,amount",
        [("Rent", "Housing", 0), ("", "Housing", 100), ("Rent", " ", 100)],
    )
    def test_invalid_expense(self, expense_service, description, category, amount):
        with pytest.raises(ValidationError):
            expense_service.record_expense(description=description, category=category, amount=amount)
