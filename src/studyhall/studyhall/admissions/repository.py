from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import Admission, NewAdmission


class AdmissionRepository(Protocol):
    def list_admissions(
        self,
        *,
        payment_status: Optional[PaymentStatus] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[Admission]:
        raise NotImplementedError

    def get_admission(self, admission_id: int) -> Optional[Admission]:
        raise NotImplementedError

    def create_admission(self, new: NewAdmission) -> int:
        raise NotImplementedError
