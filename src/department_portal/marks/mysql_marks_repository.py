from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import MarkEntry, MarkRecord
from .repository import MarksRepository

_COLUMNS = "student_id, subject_id, class_id, assessment_name, marks_obtained, max_marks, recorded_at"


def _to_record(row: dict) -> MarkRecord:
    return MarkRecord(
        student_id=int(row["student_id"]),
        subject_id=int(row["subject_id"]),
        class_id=int(row["class_id"]),
        assessment_name=row["assessment_name"],
        # DECIMAL columns come back as Decimal
        marks_obtained=float(row["marks_obtained"]),
        max_marks=float(row["max_marks"]),
        recorded_at=row.get("recorded_at"),
    )


class MySQLMarksRepository(MarksRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_batch(
        self,
        *,
        subject_id: int,
        class_id: int,
        assessment_name: str,
        entries: Iterable[MarkEntry],
    ) -> int:
        params = [
            (int(e.student_id), int(subject_id), int(class_id), assessment_name, e.marks_obtained, e.max_marks)
            for e in entries
        ]
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO marks(student_id, subject_id, class_id, assessment_name, marks_obtained, max_marks)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    class_id=VALUES(class_id),
                    marks_obtained=VALUES(marks_obtained),
                    max_marks=VALUES(max_marks),
                    recorded_at=CURRENT_TIMESTAMP
                """,
                params,
            )
        return len(params)

    def list_for_assessment(self, *, subject_id: int, assessment_name: str) -> Sequence[MarkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM marks WHERE subject_id=%s AND assessment_name=%s ORDER BY student_id",
                (int(subject_id), assessment_name),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_assessments(self, subject_id: int) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT DISTINCT assessment_name FROM marks WHERE subject_id=%s ORDER BY assessment_name",
                (int(subject_id),),
            )
            return [r["assessment_name"] for r in fetchall(cur)]

    def list_for_student(self, student_id: int) -> Sequence[MarkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM marks WHERE student_id=%s ORDER BY recorded_at DESC, mark_id DESC",
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_class_subject(
        self, *, class_id: int, subject_id: int, assessment_name: Optional[str] = None
    ) -> Sequence[MarkRecord]:
        sql = f"SELECT {_COLUMNS} FROM marks WHERE class_id=%s AND subject_id=%s"
        params: list = [int(class_id), int(subject_id)]
        if assessment_name:
            sql += " AND assessment_name=%s"
            params.append(assessment_name)
        sql += " ORDER BY assessment_name, student_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
