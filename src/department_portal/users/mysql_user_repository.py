from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, role, class_id, roll_no"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        class_id=int(row["class_id"]) if row.get("class_id") is not None else None,
        roll_no=row.get("roll_no"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_name(self, name: str) -> Optional[User]:
        return self._get_one("name", name)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_many(self, user_ids: Iterable[int]) -> Dict[int, User]:
        ids = sorted({int(i) for i in user_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id IN ({in_clause(ids)})", tuple(ids))
            return {u.user_id: u for u in map(_to_user, fetchall(cur))}

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        class_id: Optional[int] = None,
        roll_no: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO users(name, email, password_hash, role, class_id, roll_no)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (name, email, password_hash, role.value, class_id, roll_no),
                )
            except mysql.connector.Error as e:
                if is_duplicate_key(e):
                    raise ConflictError("Username or email already in use.")
                raise
            return int(cur.lastrowid)

    def update_user(
        self,
        *,
        user_id: int,
        name: str,
        email: str,
        class_id: Optional[int],
        password_hash: Optional[str] = None,
    ) -> bool:
        sets = ["name=%s", "email=%s", "class_id=%s"]
        params: list[object] = [name, email, class_id]
        if password_hash:
            sets.append("password_hash=%s")
            params.append(password_hash)
        params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE user_id=%s", tuple(params))
            # rowcount is 0 when nothing changed, so confirm existence separately
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (int(user_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users WHERE role=%s", (role.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY name", (role.value,))
            return [_to_user(r) for r in fetchall(cur)]

    def list_students_in_class(self, class_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE class_id=%s AND role='student'
                ORDER BY roll_no IS NULL, roll_no, name
                """,
                (int(class_id),),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def count_students_in_class(self, class_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM users WHERE class_id=%s AND role='student'",
                (int(class_id),),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0
