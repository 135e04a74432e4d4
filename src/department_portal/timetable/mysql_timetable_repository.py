from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Schedule, Timetable, empty_schedule
from .repository import TimetableRepository


def _build(rows: list[dict]) -> Dict[int, Timetable]:
    out: Dict[int, Timetable] = {}
    for r in rows:
        class_id = int(r["class_id"])
        tt = out.get(class_id)
        if tt is None:
            tt = Timetable(class_id=class_id, schedule=empty_schedule())
            out[class_id] = tt
        slots = tt.schedule.get(r["day"])
        index = int(r["slot_index"])
        if slots is not None and 0 <= index < len(slots):
            slots[index] = int(r["subject_id"]) if r.get("subject_id") is not None else None
    return out


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_class(self, class_id: int) -> Optional[Timetable]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT class_id, day, slot_index, subject_id FROM timetable_slots WHERE class_id=%s",
                (int(class_id),),
            )
            return _build(fetchall(cur)).get(int(class_id))

    def list_all(self) -> Sequence[Timetable]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, day, slot_index, subject_id FROM timetable_slots ORDER BY class_id")
            return list(_build(fetchall(cur)).values())

    def save(self, *, class_id: int, schedule: Schedule) -> None:
        rows = [
            (int(class_id), day, index, subject_id)
            for day, slots in schedule.items()
            for index, subject_id in enumerate(slots)
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO timetable_slots(class_id, day, slot_index, subject_id)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE subject_id=VALUES(subject_id)
                """,
                rows,
            )

    def delete_for_class(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timetable_slots WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0
