"""Tests for the Checkout use case."""

from decimal import Decimal

import pytest

from shopcat.application.checkout import Checkout, CheckoutHandler
from shopcat.application.execution import InlineContext
from shopcat.domain.exceptions import PaymentFailed, ValidationError
from shopcat.domain.model.cart import CartLedger
from shopcat.domain.model.product import Product
from shopcat.domain.model.value_objects import Money
from tests.fakes import FakePaymentGateway


def _ledger() -> CartLedger:
    ledger = CartLedger()
    ledger.add(Product.from_record({"id": "1", "name": "Mug", "price": 5.5}))
    ledger.add(Product.from_record({"id": "2", "name": "Lamp", "price": "4.50"}))
    return ledger


class TestCheckoutHandler:

    def test_charges_amount(self):
        gateway = FakePaymentGateway()
        receipt = CheckoutHandler(gateway).handle("+254 700 000 000", Money.of(10))

        assert receipt.successful
        assert gateway.requests == [("+254700000000", Money(Decimal("10")))]

    def test_rejects_bad_phone(self):
        gateway = FakePaymentGateway()
        with pytest.raises(ValidationError, match="Invalid phone number"):
            CheckoutHandler(gateway).handle("call me", Money.of(10))
        assert gateway.requests == []

    def test_rejects_empty_cart(self):
        with pytest.raises(ValidationError, match="Nothing to pay for"):
            CheckoutHandler(FakePaymentGateway()).handle("0700000000", Money.zero())

    def test_declined_payment(self):
        with pytest.raises(PaymentFailed, match="declined"):
            CheckoutHandler(FakePaymentGateway(successful=False)).handle("0700000000", Money.of(1))


class TestCheckout:

    def test_charges_cart_subtotal(self):
        gateway = FakePaymentGateway()
        checkout = Checkout(CheckoutHandler(gateway), InlineContext(), InlineContext())
        receipts = []

        checkout.initiate("0700000000", _ledger(), on_success=receipts.append)

        assert receipts[0].message == "Payment initiated successfully!"
        assert gateway.requests[0][1].amount == Decimal("10.0")

    def test_error_callback(self):
        checkout = Checkout(
            CheckoutHandler(FakePaymentGateway(successful=False)),
            InlineContext(),
            InlineContext(),
        )
        errors = []
        checkout.initiate("0700000000", _ledger(), on_error=errors.append)
        assert isinstance(errors[0], PaymentFailed)
