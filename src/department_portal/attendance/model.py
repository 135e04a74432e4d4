from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceRecord:
    """One presence mark; (student, subject, date, period) is unique."""

    student_id: int
    subject_id: int
    class_id: int
    date: date
    period: str
    is_present: bool


@dataclass(frozen=True)
class AttendanceEntry:
    """Input row of a batch: one student's presence for the session."""

    student_id: int
    is_present: bool
