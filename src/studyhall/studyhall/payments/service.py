from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from ..admissions.repository import AdmissionRepository
from ..bookings.repository import BookingRepository
from ..common.datetime_utils import add_months
from ..common.validators import require_non_empty, require_positive_amount
from ..core.enums import PaymentDecision, PaymentMethod, PaymentStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import NewPayment, Payment, PaymentSettlement
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


class PaymentService:
    """Cash payment workflow: students submit, admins approve or reject."""

    def __init__(self, payments: PaymentRepository, bookings: BookingRepository, admissions: AdmissionRepository):
        self._payments = payments
        self._bookings = bookings
        self._admissions = admissions

    def create_cash_payment(
        self,
        *,
        user_id: str,
        amount,
        booking_id: Optional[int] = None,
        admission_id: Optional[int] = None,
        method: PaymentMethod = PaymentMethod.CASH,
        now: datetime | None = None,
    ) -> int:
        now = now or datetime.now()
        user_id = require_non_empty(user_id, "User")
        amount = require_positive_amount(amount, "Amount")

        if (booking_id is None) == (admission_id is None):
            raise ValidationError("A payment must reference exactly one booking or admission")

        if booking_id is not None:
            booking = self._bookings.get_booking(int(booking_id))
            if not booking or booking.user_id != user_id:
                raise NotFoundError("Booking not found")
        else:
            admission = self._admissions.get_admission(int(admission_id))
            if not admission or admission.user_id != user_id:
                raise NotFoundError("Admission not found")
            if admission.payment_status == PaymentStatus.PAID:
                raise ValidationError("This admission is already paid")

        payment_id = self._payments.create_payment(
            NewPayment(
                user_id=user_id,
                amount=amount,
                method=method,
                booking_id=int(booking_id) if booking_id is not None else None,
                admission_id=int(admission_id) if admission_id is not None else None,
                receipt_number=f"RCP{now.strftime('%Y%m%d%H%M%S')}",
            )
        )
        logger.info("payment %s of %s submitted by user %s", payment_id, amount, user_id)
        return payment_id

    def list_pending(self, *, current_role: Role) -> List[Payment]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        return list(self._payments.list_payments(status=PaymentDecision.PENDING))

    def list_for_user(self, user_id: str) -> List[Payment]:
        return list(self._payments.list_payments(user_id=user_id))

    def _get_pending(self, payment_id: int) -> Payment:
        payment = self._payments.get_payment(int(payment_id))
        if not payment:
            raise NotFoundError("Payment not found")
        if payment.status != PaymentDecision.PENDING:
            raise ValidationError("Payment has already been processed")
        return payment

    def _settle(self, settlement: PaymentSettlement) -> Payment:
        if not self._payments.settle_payment(settlement):
            raise ValidationError("Payment has already been processed")
        return self._payments.get_payment(settlement.payment_id)

    def approve(
        self,
        *,
        current_role: Role,
        admin_user_id: str,
        payment_id: int,
        now: datetime | None = None,
    ) -> Payment:
        """Approve a pending payment: confirm its booking or activate its admission."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        now = now or datetime.now()
        payment = self._get_pending(payment_id)

        settlement = PaymentSettlement(
            payment_id=payment.payment_id,
            status=PaymentDecision.APPROVED,
            decided_by=str(admin_user_id),
            decided_at=now,
            confirm_booking_id=payment.booking_id,
        )
        if payment.admission_id is not None:
            admission = self._admissions.get_admission(payment.admission_id)
            if admission is None:
                raise NotFoundError("Admission not found")
            settlement = replace(
                settlement,
                admission_id=admission.admission_id,
                admission_status=PaymentStatus.PAID,
                admission_paid_at=now,
                admission_end=add_months(now, admission.duration_months),
            )

        approved = self._settle(settlement)
        logger.info("payment %s approved by %s", payment.payment_id, admin_user_id)
        return approved

    def reject(
        self,
        *,
        current_role: Role,
        admin_user_id: str,
        payment_id: int,
        now: datetime | None = None,
    ) -> Payment:
        """Reject a pending payment: free its seat; its admission stays pending."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        now = now or datetime.now()
        payment = self._get_pending(payment_id)

        settlement = PaymentSettlement(
            payment_id=payment.payment_id,
            status=PaymentDecision.REJECTED,
            decided_by=str(admin_user_id),
            decided_at=now,
            release_booking_id=payment.booking_id,
        )
        if payment.admission_id is not None:
            settlement = replace(
                settlement,
                admission_id=payment.admission_id,
                admission_status=PaymentStatus.PENDING,
            )

        rejected = self._settle(settlement)
        logger.info("payment %s rejected by %s", payment.payment_id, admin_user_id)
        return rejected
