from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentDecision
from .model import NewPayment, Payment, PaymentSettlement


class PaymentRepository(Protocol):
    def create_payment(self, new: NewPayment) -> int:
        raise NotImplementedError

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def list_payments(
        self,
        *,
        status: Optional[PaymentDecision] = None,
        user_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[Payment]:
        raise NotImplementedError

    def settle_payment(self, settlement: PaymentSettlement) -> bool:
        """Decide a PENDING payment and apply its booking/admission change atomically.

        Returns False, writing nothing, if the payment was no longer pending.
        """

        raise NotImplementedError
