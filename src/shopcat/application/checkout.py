"""Application service: Checkout.

Charges the cart subtotal through the payment gateway.  The gateway
wired by the composition root is a stub that always accepts.
"""

from __future__ import annotations

import logging
import re

from shopcat.application.execution import ExecutionContext
from shopcat.application.operation import ErrorCallback, Operation, SuccessCallback, launch
from shopcat.domain.exceptions import PaymentFailed, ValidationError
from shopcat.domain.gateway.payment_gateway import PaymentGateway, PaymentReceipt
from shopcat.domain.model.cart import CartLedger
from shopcat.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

_PHONE_PATTERN = re.compile(r"^\+?\d{7,15}$")


class CheckoutHandler:

    def __init__(self, gateway: PaymentGateway) -> None:
        self._gateway = gateway

    def handle(self, phone_number: str, amount: Money) -> PaymentReceipt:
        phone_number = (phone_number or "").replace(" ", "")
        if not _PHONE_PATTERN.match(phone_number):
            raise ValidationError(f"Invalid phone number: {phone_number!r}")
        if amount <= Money.zero():
            raise ValidationError("Nothing to pay for")

        receipt = self._gateway.initiate(phone_number, amount)
        if not receipt.successful:
            raise PaymentFailed(f"Payment failed: {receipt.message}")
        logger.info("Payment of %s initiated for %s", amount, phone_number)
        return receipt


class Checkout:
    """Runs ``CheckoutHandler`` with the pipeline's context rules."""

    def __init__(
        self,
        handler: CheckoutHandler,
        interactive: ExecutionContext,
        background: ExecutionContext,
    ) -> None:
        self._handler = handler
        self._interactive = interactive
        self._background = background

    def initiate(
        self,
        phone_number: str,
        ledger: CartLedger,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> Operation:
        amount = ledger.subtotal()
        return launch(
            "checkout",
            lambda: self._handler.handle(phone_number, amount),
            self._background,
            self._interactive,
            on_success=on_success,
            on_error=on_error,
        )
