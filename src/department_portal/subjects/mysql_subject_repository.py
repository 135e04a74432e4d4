from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import Subject
from .repository import SubjectRepository

_COLUMNS = "subject_id, name, code, class_id, faculty_id"


def _to_subject(row: dict) -> Subject:
    return Subject(
        subject_id=int(row["subject_id"]),
        name=row["name"],
        code=row["code"],
        class_id=int(row["class_id"]),
        faculty_id=int(row["faculty_id"]),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = (), order: str = "name") -> list[Subject]:
        sql = f"SELECT {_COLUMNS} FROM subjects"
        if where:
            sql += f" WHERE {where}"
        sql += f" ORDER BY {order}"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_subject(r) for r in fetchall(cur)]

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        rows = self._select("subject_id=%s", (int(subject_id),))
        return rows[0] if rows else None

    def get_by_code(self, code: str) -> Optional[Subject]:
        rows = self._select("code=%s", (code,))
        return rows[0] if rows else None

    def get_many(self, subject_ids: Iterable[int]) -> Dict[int, Subject]:
        ids = sorted({int(i) for i in subject_ids})
        if not ids:
            return {}
        return {s.subject_id: s for s in self._select(f"subject_id IN ({in_clause(ids)})", tuple(ids))}

    def list_all(self) -> Sequence[Subject]:
        return self._select()

    def list_by_class(self, class_id: int) -> Sequence[Subject]:
        return self._select("class_id=%s", (int(class_id),))

    def list_by_faculty(self, faculty_id: int) -> Sequence[Subject]:
        return self._select("faculty_id=%s", (int(faculty_id),))

    def create(self, *, name: str, code: str, class_id: int, faculty_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    "INSERT INTO subjects(name, code, class_id, faculty_id) VALUES(%s,%s,%s,%s)",
                    (name, code, int(class_id), int(faculty_id)),
                )
            except mysql.connector.Error as e:
                if is_duplicate_key(e):
                    raise ConflictError("A subject with this code already exists.")
                raise
            return int(cur.lastrowid)

    def update(self, *, subject_id: int, name: str, code: str, class_id: int, faculty_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE subjects
                SET name=%s, code=%s, class_id=%s, faculty_id=%s
                WHERE subject_id=%s
                """,
                (name, code, int(class_id), int(faculty_id), int(subject_id)),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM subjects WHERE subject_id=%s", (int(subject_id),))
            return fetchone(cur) is not None

    def set_faculty(self, *, subject_id: int, faculty_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE subjects SET faculty_id=%s WHERE subject_id=%s",
                (int(faculty_id), int(subject_id)),
            )
            return cur.rowcount > 0

    def delete(self, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE subject_id=%s", (int(subject_id),))
            return cur.rowcount > 0
