from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ApprovalStatus, Role


@dataclass(frozen=True)
class Account:
    """Domain entity: a library member and the admin's decision on it."""

    user_id: str
    full_name: str
    email: str
    role: Role = Role.STUDENT
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    mobile_number: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED
