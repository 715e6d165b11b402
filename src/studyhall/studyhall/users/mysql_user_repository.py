from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ApprovalStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Account
from .repository import UserRepository

_COLUMNS = "user_id, full_name, email, mobile_number, role, approval_status, approved_by, approved_at, created_at"


def _to_account(r: Dict[str, Any]) -> Account:
    return Account(
        user_id=str(r["user_id"]),
        full_name=r["full_name"],
        email=r["email"],
        role=Role(r["role"]),
        approval_status=ApprovalStatus(r["approval_status"]),
        mobile_number=r.get("mobile_number"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        created_at=r.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_account(self, user_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_account(row) if row else None

    def list_accounts(
        self,
        *,
        role: Optional[Role] = None,
        approval_status: Optional[ApprovalStatus] = None,
    ) -> Sequence[Account]:
        where = []
        params: list[Any] = []
        if role is not None:
            where.append("role=%s")
            params.append(role.value)
        if approval_status is not None:
            where.append("approval_status=%s")
            params.append(approval_status.value)

        sql = f"SELECT {_COLUMNS} FROM users"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_account(r) for r in fetchall(cur)]

    def set_approval(
        self,
        *,
        user_id: str,
        status: ApprovalStatus,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET approval_status=%s, approved_by=%s, approved_at=%s
                WHERE user_id=%s
                """,
                (status.value, decided_by, decided_at, user_id),
            )
            return cur.rowcount > 0
