"""Abstract payment gateway used by checkout."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shopcat.domain.model.value_objects import Money


@dataclass(frozen=True)
class PaymentReceipt:
    successful: bool
    message: str


class PaymentGateway(ABC):

    @abstractmethod
    def initiate(self, phone_number: str, amount: Money) -> PaymentReceipt:
        """Ask the payer's phone to authorize ``amount``."""
