from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..core.enums import ApprovalStatus, Role
from ..core.exceptions import AccountNotApprovedError, AuthorizationError, NotFoundError
from .model import Account
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Admin review of student accounts.

    Students start PENDING; only APPROVED accounts may book seats.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: str) -> Account:
        account = self._users.get_account(user_id)
        if not account:
            raise NotFoundError("Account not found")
        return account

    def require_approved(self, user_id: str) -> Account:
        account = self._users.get_account(user_id)
        if not account or not account.is_approved:
            raise AccountNotApprovedError()
        return account

    def list_students(
        self,
        *,
        current_role: Role,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> List[Account]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        return list(self._users.list_accounts(role=Role.STUDENT, approval_status=approval_status))

    def approve(self, *, current_role: Role, admin_user_id: str, user_id: str, now: datetime | None = None) -> Account:
        return self._decide(current_role, admin_user_id, user_id, ApprovalStatus.APPROVED, now)

    def reject(self, *, current_role: Role, admin_user_id: str, user_id: str, now: datetime | None = None) -> Account:
        return self._decide(current_role, admin_user_id, user_id, ApprovalStatus.REJECTED, now)

    def _decide(
        self,
        current_role: Role,
        admin_user_id: str,
        user_id: str,
        status: ApprovalStatus,
        now: datetime | None,
    ) -> Account:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        now = now or datetime.now()

        account = self.get(user_id)
        if account.role != Role.STUDENT:
            raise AuthorizationError("Only student accounts go through approval")

        self._users.set_approval(user_id=account.user_id, status=status, decided_by=str(admin_user_id), decided_at=now)
        logger.info("account %s %s by %s", account.user_id, status.value, admin_user_id)
        return self.get(account.user_id)
