from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, Role
from .model import Account


class UserRepository(Protocol):
    def get_account(self, user_id: str) -> Optional[Account]:
        raise NotImplementedError

    def list_accounts(
        self,
        *,
        role: Optional[Role] = None,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> Sequence[Account]:
        raise NotImplementedError

    def set_approval(
        self,
        *,
        user_id: str,
        status: ApprovalStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        raise NotImplementedError
