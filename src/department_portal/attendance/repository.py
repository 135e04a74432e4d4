from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from .model import AttendanceEntry, AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert_batch(
        self,
        *,
        subject_id: int,
        class_id: int,
        on_date: date,
        period: str,
        entries: Iterable[AttendanceEntry],
    ) -> int:
        """Insert or overwrite one record per entry; returns the number written."""

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_class_subject(self, *, class_id: int, subject_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
