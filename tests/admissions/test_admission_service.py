from __future__ import annotations

from typing import Optional

import pytest

from studyhall.admissions.model import Admission, NewAdmission
from studyhall.admissions.service import AdmissionService
from studyhall.core.enums import PaymentStatus
from studyhall.core.exceptions import InvalidShiftError, ValidationError


class InMemoryAdmissions:
    def __init__(self):
        self.rows: dict[int, Admission] = {}

    def create_admission(self, new: NewAdmission) -> int:
        admission_id = len(self.rows) + 1
        self.rows[admission_id] = Admission(
            admission_id=admission_id,
            user_id=new.user_id,
            selected_shifts=new.selected_shifts,
            duration_months=new.duration_months,
            registration_fee=new.registration_fee,
            shift_fee=new.shift_fee,
            total_amount=new.total_amount,
            full_name=new.full_name,
            course_name=new.course_name,
        )
        return admission_id

    def get_admission(self, admission_id: int) -> Optional[Admission]:
        return self.rows.get(admission_id)

    def list_admissions(self, *, payment_status=None, user_id=None):
        return [
            a
            for a in self.rows.values()
            if (payment_status is None or a.payment_status == payment_status)
            and (user_id is None or a.user_id == user_id)
        ]


def test_quote_includes_registration_fee():
    quote = AdmissionService(InMemoryAdmissions()).quote(["noon", "morning"])

    assert quote.selected_shifts == ("morning", "noon")
    assert (quote.shift_fee, quote.registration_fee, quote.total_amount) == (549, 50, 599)


def test_create_stores_pending_admission_with_fees():
    repo = InMemoryAdmissions()
    svc = AdmissionService(repo)

    admission = svc.create(user_id="U1", selected_shifts=["night", "evening"], duration_months=3, full_name=" Asha ")

    assert admission.payment_status == PaymentStatus.PENDING
    assert admission.selected_shifts == ("evening", "night")
    assert admission.total_amount == 599
    assert admission.full_name == "Asha"
    assert svc.for_user("U1") == [admission]


@pytest.mark.parametrize("duration", [0, 2, 12, None, "x"])
def test_duration_must_be_1_3_or_6(duration):
    with pytest.raises(ValidationError):
        AdmissionService(InMemoryAdmissions()).create(user_id="U1", selected_shifts=["morning"], duration_months=duration)


def test_requires_known_non_empty_shifts():
    svc = AdmissionService(InMemoryAdmissions())
    with pytest.raises(ValidationError):
        svc.create(user_id="U1", selected_shifts=[], duration_months=1)
    with pytest.raises(InvalidShiftError):
        svc.create(user_id="U1", selected_shifts=["dawn"], duration_months=1)
