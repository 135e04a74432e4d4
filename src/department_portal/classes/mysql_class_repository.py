from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import SchoolClass
from .repository import ClassRepository

_COLUMNS = "class_id, name, academic_year, incharge_faculty_id"


def _to_class(row: dict) -> SchoolClass:
    return SchoolClass(
        class_id=int(row["class_id"]),
        name=row["name"],
        academic_year=row["academic_year"],
        incharge_faculty_id=int(row["incharge_faculty_id"]),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes WHERE class_id=%s", (int(class_id),))
            row = fetchone(cur)
            return _to_class(row) if row else None

    def get_by_name(self, name: str) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_class(row) if row else None

    def get_many(self, class_ids: Iterable[int]) -> Dict[int, SchoolClass]:
        ids = sorted({int(i) for i in class_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes WHERE class_id IN ({in_clause(ids)})", tuple(ids))
            return {c.class_id: c for c in map(_to_class, fetchall(cur))}

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes ORDER BY name")
            return [_to_class(r) for r in fetchall(cur)]

    def list_by_incharge(self, faculty_id: int) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM classes WHERE incharge_faculty_id=%s ORDER BY name",
                (int(faculty_id),),
            )
            return [_to_class(r) for r in fetchall(cur)]

    def create(self, *, name: str, academic_year: str, incharge_faculty_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO classes(name, academic_year, incharge_faculty_id) VALUES(%s,%s,%s)",
                    (name, academic_year, int(incharge_faculty_id)),
                )
            except mysql.connector.Error as e:
                if is_duplicate_key(e):
                    raise ConflictError("A class with this name already exists.")
                raise
            return int(cur.lastrowid)

    def update(self, *, class_id: int, name: str, academic_year: str, incharge_faculty_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE classes
                SET name=%s, academic_year=%s, incharge_faculty_id=%s
                WHERE class_id=%s
                """,
                (name, academic_year, int(incharge_faculty_id), int(class_id)),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM classes WHERE class_id=%s", (int(class_id),))
            return fetchone(cur) is not None

    def set_incharge(self, *, class_id: int, faculty_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE classes SET incharge_faculty_id=%s WHERE class_id=%s",
                (int(faculty_id), int(class_id)),
            )
            return cur.rowcount > 0

    def delete(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0
