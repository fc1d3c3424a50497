from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "id, name, email, password_hash, role, workspace_id, parent_admin_id, api_token, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=row["id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        workspace_id=row["workspace_id"],
        parent_admin_id=row.get("parent_admin_id"),
        api_token=row.get("api_token"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {where}", params)
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._get_one("id=%s", (user_id,))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email=%s", (email,))

    def get_by_api_token(self, api_token: str) -> Optional[User]:
        return self._get_one("api_token=%s", (api_token,))

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def list_by_workspace(self, workspace_id: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE workspace_id=%s ORDER BY created_at ASC",
                (workspace_id,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def list_super_admins(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE role=%s ORDER BY created_at ASC, id ASC",
                (Role.SUPER_ADMIN.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        workspace_id: str,
        parent_admin_id: Optional[str],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, name, email, password_hash, role, workspace_id, parent_admin_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, name, email, password_hash, role.value, workspace_id, parent_admin_id),
            )

    def set_role(self, user_id: str, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET role=%s WHERE id=%s", (role.value, user_id))
            return cur.rowcount > 0

    def demote_super_admins_except(self, keep_user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET role=%s WHERE role=%s AND id<>%s",
                (Role.ADMIN.value, Role.SUPER_ADMIN.value, keep_user_id),
            )
            return int(cur.rowcount)

    def set_api_token(self, user_id: str, api_token: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET api_token=%s WHERE id=%s", (api_token, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
