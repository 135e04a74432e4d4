from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import Event
from .repository import EventRepository

_COLUMNS = "event_id, title, date, description, type, location, incharge_faculty_id"


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, rows: list[dict]) -> list[Event]:
        ids = [int(r["event_id"]) for r in rows]
        targets: dict[int, list[int]] = defaultdict(list)
        if ids:
            cur.execute(
                f"SELECT event_id, class_id FROM event_classes WHERE event_id IN ({in_clause(ids)}) ORDER BY class_id",
                tuple(ids),
            )
            for t in fetchall(cur):
                targets[int(t["event_id"])].append(int(t["class_id"]))

        return [
            Event(
                event_id=int(r["event_id"]),
                title=r["title"],
                date=r["date"],
                description=r["description"],
                type=EventType(r["type"]),
                location=r["location"],
                incharge_faculty_id=int(r["incharge_faculty_id"]) if r.get("incharge_faculty_id") is not None else None,
                class_ids=tuple(targets.get(int(r["event_id"]), ())),
            )
            for r in rows
        ]

    def create(
        self,
        *,
        title: str,
        date: datetime,
        description: str,
        type: EventType,
        location: str,
        incharge_faculty_id: Optional[int],
        class_ids: Iterable[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(title, date, description, type, location, incharge_faculty_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (title, date, description, type.value, location, incharge_faculty_id),
            )
            event_id = int(cur.lastrowid)
            params = [(event_id, int(c)) for c in sorted(set(class_ids))]
            if params:
                cur.executemany("INSERT INTO event_classes(event_id, class_id) VALUES(%s,%s)", params)
            return event_id

    def list_all(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events ORDER BY date DESC")
            return self._load(cur, fetchall(cur))

    def list_upcoming(self, since: datetime) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE date >= %s ORDER BY date", (since,))
            return self._load(cur, fetchall(cur))
