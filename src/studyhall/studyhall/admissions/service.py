from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..common.validators import require_non_empty
from ..core.constants import ADMISSION_DURATIONS, REGISTRATION_FEE
from ..core.exceptions import NotFoundError, ValidationError
from ..fees.calculator import quote_fee
from ..shifts.calendar import SHIFT_IDS, normalize_shift_id
from .model import Admission, FeeQuote, NewAdmission
from .repository import AdmissionRepository

logger = logging.getLogger(__name__)


def _canonical_shifts(selected_shifts: Iterable[str]) -> tuple[str, ...]:
    chosen = {normalize_shift_id(s) for s in selected_shifts or ()}
    # catalog order, not selection order
    return tuple(s for s in SHIFT_IDS if s in chosen)


class AdmissionService:
    def __init__(self, admissions: AdmissionRepository):
        self._admissions = admissions

    def quote(self, selected_shifts: Iterable[str]) -> FeeQuote:
        shifts = _canonical_shifts(selected_shifts)
        if not shifts:
            raise ValidationError("Select at least one shift")
        return FeeQuote(selected_shifts=shifts, shift_fee=quote_fee(shifts), registration_fee=REGISTRATION_FEE)

    def create(
        self,
        *,
        user_id: str,
        selected_shifts: Iterable[str],
        duration_months: int,
        full_name: Optional[str] = None,
        course_name: Optional[str] = None,
    ) -> Admission:
        user_id = require_non_empty(user_id, "User")
        try:
            duration = int(duration_months)
        except (TypeError, ValueError):
            raise ValidationError("Duration must be 1, 3 or 6 months")
        if duration not in ADMISSION_DURATIONS:
            raise ValidationError("Duration must be 1, 3 or 6 months")

        quote = self.quote(selected_shifts)
        new = NewAdmission(
            user_id=user_id,
            selected_shifts=quote.selected_shifts,
            duration_months=duration,
            registration_fee=quote.registration_fee,
            shift_fee=quote.shift_fee,
            total_amount=quote.total_amount,
            full_name=(full_name or "").strip() or None,
            course_name=(course_name or "").strip() or None,
        )
        admission_id = self._admissions.create_admission(new)
        logger.info("admission %s created for user %s (%s)", admission_id, user_id, ",".join(new.selected_shifts))

        admission = self._admissions.get_admission(admission_id)
        if admission is None:
            raise NotFoundError("Admission not found after creation")
        return admission

    def for_user(self, user_id: str) -> List[Admission]:
        return list(self._admissions.list_admissions(user_id=user_id))
