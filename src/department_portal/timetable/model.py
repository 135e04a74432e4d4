from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.constants import SCHOOL_DAYS, TEACHING_PERIODS_PER_DAY

Schedule = Dict[str, List[Optional[int]]]


def empty_schedule() -> Schedule:
    return {day.value: [None] * TEACHING_PERIODS_PER_DAY for day in SCHOOL_DAYS}


@dataclass(frozen=True)
class Timetable:
    """Weekly schedule of one class: day -> subject id per teaching period."""

    class_id: int
    schedule: Schedule = field(default_factory=empty_schedule)

    def subject_ids(self) -> set[int]:
        return {sid for slots in self.schedule.values() for sid in slots if sid}


@dataclass(frozen=True)
class TimetablePeriod:
    """One rendered slot of the ten-slot daily template."""

    period: int
    time: str
    subject_name: Optional[str]
    is_break: bool
    faculty_name: Optional[str] = None
    class_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "time": self.time,
            "subject_name": self.subject_name,
            "faculty_name": self.faculty_name,
            "class_name": self.class_name,
            "is_break": self.is_break,
        }
