from __future__ import annotations

from datetime import date

import pytest

from department_portal.attendance.model import AttendanceEntry
from department_portal.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from department_portal.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from department_portal.database.mysql_base import db_cursor, in_clause, is_duplicate_key
from department_portal.marks.model import MarkEntry
from department_portal.marks.mysql_marks_repository import MySQLMarksRepository
from department_portal.timetable.model import empty_schedule
from department_portal.timetable.mysql_timetable_repository import MySQLTimetableRepository


class RecordingCursor:
    def __init__(self, rows=None):
        self.calls = []
        self.rows = rows or []
        self.rowcount = 0
        self.lastrowid = 1
        self.closed = False

    def execute(self, sql, params=None):
        self.calls.append((" ".join(sql.split()), params))

    def executemany(self, sql, params):
        self.calls.append((" ".join(sql.split()), list(params)))

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def close(self):
        self.closed = True


class RecordingConnection:
    def __init__(self, cursor: RecordingCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class RecordingFactory:
    def __init__(self, rows=None):
        self.cursor = RecordingCursor(rows)
        self.conn = RecordingConnection(self.cursor)

    def connect(self):
        return self.conn


def test_attendance_batch_is_an_upsert():
    factory = RecordingFactory()
    repo = MySQLAttendanceRepository(factory)

    written = repo.upsert_batch(
        subject_id=3,
        class_id=2,
        on_date=date(2026, 1, 5),
        period="1",
        entries=[AttendanceEntry(7, True), AttendanceEntry(8, False)],
    )

    sql, params = factory.cursor.calls[0]
    assert written == 2
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params == [(7, 3, 2, date(2026, 1, 5), "1", 1), (8, 3, 2, date(2026, 1, 5), "1", 0)]
    assert factory.conn.committed and factory.conn.closed


def test_empty_batch_skips_the_database():
    factory = RecordingFactory()

    assert MySQLMarksRepository(factory).upsert_batch(subject_id=1, class_id=1, assessment_name="Q", entries=[]) == 0
    assert factory.cursor.calls == []


def test_marks_upsert_refreshes_timestamp():
    factory = RecordingFactory()

    MySQLMarksRepository(factory).upsert_batch(
        subject_id=1, class_id=2, assessment_name="Unit Test 1", entries=[MarkEntry(5, 40.0, 50.0)]
    )

    sql, params = factory.cursor.calls[0]
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert "recorded_at=CURRENT_TIMESTAMP" in sql
    assert params == [(5, 1, 2, "Unit Test 1", 40.0, 50.0)]


def test_marks_rows_are_converted_from_decimal():
    from decimal import Decimal

    factory = RecordingFactory(
        rows=[
            {
                "student_id": 5,
                "subject_id": 1,
                "class_id": 2,
                "assessment_name": "Unit Test 1",
                "marks_obtained": Decimal("40.50"),
                "max_marks": Decimal("50.00"),
                "recorded_at": None,
            }
        ]
    )

    (record,) = MySQLMarksRepository(factory).list_for_class_subject(class_id=2, subject_id=1, assessment_name="Unit Test 1")

    assert record.marks_obtained == 40.5
    sql, params = factory.cursor.calls[0]
    assert "assessment_name=%s" in sql
    assert params == (2, 1, "Unit Test 1")


def test_timetable_save_writes_every_slot():
    factory = RecordingFactory()
    schedule = empty_schedule()
    schedule["monday"][0] = 4

    MySQLTimetableRepository(factory).save(class_id=9, schedule=schedule)

    _, params = factory.cursor.calls[0]
    assert len(params) == 5 * 8
    assert (9, "monday", 0, 4) in params


def test_timetable_rows_build_schedule():
    factory = RecordingFactory(
        rows=[
            {"class_id": 9, "day": "monday", "slot_index": 1, "subject_id": 4},
            {"class_id": 9, "day": "friday", "slot_index": 7, "subject_id": None},
        ]
    )

    timetable = MySQLTimetableRepository(factory).get_for_class(9)

    assert timetable.schedule["monday"][1] == 4
    assert timetable.subject_ids() == {4}


def test_db_cursor_rolls_back_on_error():
    factory = RecordingFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory):
            raise RuntimeError("boom")

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert factory.conn.closed and factory.cursor.closed


def test_sql_helpers():
    class DupError(Exception):
        errno = 1062

    assert in_clause([1, 2, 3]) == "%s, %s, %s"
    assert is_duplicate_key(DupError())
    assert not is_duplicate_key(ValueError())


def test_sql_file_splitting():
    sql = """
    CREATE DATABASE portal;
    USE portal;
    -- a comment; with a semicolon
    INSERT INTO events(title) VALUES ('Fest; day one');
    SELECT 1
    """

    statements = list(_iter_sql_statements(_strip_create_db_and_use(sql)))

    assert statements == ["INSERT INTO events(title) VALUES ('Fest; day one')", "SELECT 1"]
