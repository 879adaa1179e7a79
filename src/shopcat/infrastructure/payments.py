"""Payment gateway stand-in: accepts every request."""

from __future__ import annotations

import logging

from shopcat.domain.gateway.payment_gateway import PaymentGateway, PaymentReceipt
from shopcat.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


class StubPaymentGateway(PaymentGateway):

    def initiate(self, phone_number: str, amount: Money) -> PaymentReceipt:
        logger.info("Stub payment request: %s for %s", amount, phone_number)
        return PaymentReceipt(successful=True, message="Payment initiated successfully!")
