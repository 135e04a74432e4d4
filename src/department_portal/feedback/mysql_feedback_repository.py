from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Feedback
from .repository import FeedbackRepository


def _to_feedback(row: dict) -> Feedback:
    return Feedback(
        feedback_id=int(row["feedback_id"]),
        student_id=int(row["student_id"]) if row.get("student_id") is not None else None,
        faculty_id=int(row["faculty_id"]),
        subject_id=int(row["subject_id"]),
        feedback_text=row["feedback_text"],
        submitted_at=row["submitted_at"],
        is_read=bool(row["is_read"]),
    )


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, student_id: Optional[int], faculty_id: int, subject_id: int, feedback_text: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO feedback(student_id, faculty_id, subject_id, feedback_text) VALUES(%s,%s,%s,%s)",
                (student_id, int(faculty_id), int(subject_id), feedback_text),
            )
            return int(cur.lastrowid)

    def list_unread_for_faculty(self, faculty_id: int, *, limit: int) -> Sequence[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT feedback_id, student_id, faculty_id, subject_id, feedback_text, submitted_at, is_read
                FROM feedback
                WHERE faculty_id=%s AND is_read=0
                ORDER BY submitted_at DESC, feedback_id DESC
                LIMIT %s
                """,
                (int(faculty_id), int(limit)),
            )
            return [_to_feedback(r) for r in fetchall(cur)]

    def count_unread_for_faculty(self, faculty_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM feedback WHERE faculty_id=%s AND is_read=0", (int(faculty_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def mark_read(self, *, feedback_id: int, faculty_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE feedback SET is_read=1 WHERE feedback_id=%s AND faculty_id=%s",
                (int(feedback_id), int(faculty_id)),
            )
            return cur.rowcount > 0
