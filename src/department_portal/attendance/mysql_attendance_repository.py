from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "student_id, subject_id, class_id, date, period, is_present"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        student_id=int(row["student_id"]),
        subject_id=int(row["subject_id"]),
        class_id=int(row["class_id"]),
        date=row["date"],
        period=str(row["period"]),
        is_present=bool(row["is_present"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_batch(
        self,
        *,
        subject_id: int,
        class_id: int,
        on_date: date,
        period: str,
        entries: Iterable[AttendanceEntry],
    ) -> int:
        params = [
            (int(e.student_id), int(subject_id), int(class_id), on_date, period, 1 if e.is_present else 0)
            for e in entries
        ]
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(student_id, subject_id, class_id, date, period, is_present)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE class_id=VALUES(class_id), is_present=VALUES(is_present)
                """,
                params,
            )
        return len(params)

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE student_id=%s ORDER BY date, period",
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_class_subject(self, *, class_id: int, subject_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE class_id=%s AND subject_id=%s
                ORDER BY date, period
                """,
                (int(class_id), int(subject_id)),
            )
            return [_to_record(r) for r in fetchall(cur)]
