from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from ..classes.repository import ClassRepository
from ..common.validators import parse_id
from ..core.constants import FREE_PERIOD, NOT_AVAILABLE, PERIODS_CONFIG, SCHOOL_DAYS, TEACHING_PERIODS_PER_DAY
from ..core.exceptions import NotFoundError, ValidationError
from ..subjects.repository import SubjectRepository
from ..users.repository import UserRepository
from .model import Schedule, TimetablePeriod, empty_schedule
from .repository import TimetableRepository

logger = logging.getLogger(__name__)

WeekView = Dict[str, List[TimetablePeriod]]
T = TypeVar("T")


def _teaching_slots():
    """Yield (template entry, schedule index) pairs; breaks get index None."""

    index = 0
    for entry in PERIODS_CONFIG:
        if entry["is_break"]:
            yield entry, None
        else:
            yield entry, index
            index += 1


class TimetableService:
    def __init__(
        self,
        timetables: TimetableRepository,
        classes: ClassRepository,
        subjects: SubjectRepository,
        users: UserRepository,
    ):
        self._timetables = timetables
        self._classes = classes
        self._subjects = subjects
        self._users = users

    def save_timetable(self, *, class_id, schedule: Mapping[str, Sequence]) -> None:
        class_id = parse_id(class_id, "class ID")
        if not self._classes.get_by_id(class_id):
            raise NotFoundError("Class not found.")
        if not isinstance(schedule, Mapping):
            raise ValidationError("Invalid timetable format.")

        allowed = {s.subject_id for s in self._subjects.list_by_class(class_id)}
        normalized = empty_schedule()
        for day, slots in schedule.items():
            if day not in normalized:
                raise ValidationError(f"Invalid day '{day}'.")
            if not isinstance(slots, (list, tuple)) or len(slots) > TEACHING_PERIODS_PER_DAY:
                raise ValidationError(f"A day can have at most {TEACHING_PERIODS_PER_DAY} periods.")
            for i, raw in enumerate(slots):
                if raw in (None, ""):
                    continue
                subject_id = parse_id(raw, "subject ID")
                if subject_id not in allowed:
                    raise ValidationError("Timetable contains a subject that does not belong to this class.")
                normalized[day][i] = subject_id

        self._timetables.save(class_id=class_id, schedule=normalized)
        logger.info("Saved timetable for class %s", class_id)

    def get_timetable(self, class_id) -> Schedule:
        class_id = parse_id(class_id, "class ID")
        timetable = self._timetables.get_for_class(class_id)
        return timetable.schedule if timetable else empty_schedule()

    def _soft(self, what: str, empty: T, build: Callable[[], T]) -> T:
        try:
            return build()
        except Exception:
            logger.exception("Failed to build %s", what)
            return empty

    def student_view(self, student_id) -> Optional[WeekView]:
        """Week of the student's class; None when there is no class or timetable, or on failure."""

        return self._soft("student timetable", None, lambda: self._student_week(student_id))

    def faculty_view(self, faculty_id) -> WeekView:
        """Week of one faculty member across every class; empty when they handle no subjects, or on failure."""

        return self._soft("faculty timetable", {}, lambda: self._faculty_week(faculty_id))

    def _student_week(self, student_id) -> Optional[WeekView]:
        student = self._users.get_by_id(parse_id(student_id, "student ID"))
        if not student or not student.class_id:
            return None
        timetable = self._timetables.get_for_class(student.class_id)
        if not timetable:
            return None

        subjects = self._subjects.get_many(timetable.subject_ids())
        faculty = self._users.get_many(s.faculty_id for s in subjects.values())

        week: WeekView = {}
        for day in SCHOOL_DAYS:
            slots = timetable.schedule.get(day.value, [])
            periods = []
            for n, (entry, index) in enumerate(_teaching_slots(), start=1):
                if index is None:
                    periods.append(TimetablePeriod(period=n, time=entry["time"], subject_name=entry["name"], is_break=True))
                    continue
                subject = subjects.get(slots[index]) if index < len(slots) and slots[index] else None
                lecturer = faculty.get(subject.faculty_id) if subject else None
                periods.append(
                    TimetablePeriod(
                        period=n,
                        time=entry["time"],
                        subject_name=subject.name if subject else FREE_PERIOD,
                        faculty_name=lecturer.name if lecturer else NOT_AVAILABLE,
                        is_break=False,
                    )
                )
            week[day.value] = periods
        return week

    def _faculty_week(self, faculty_id) -> WeekView:
        faculty_id = parse_id(faculty_id, "faculty ID")
        handled = {s.subject_id: s for s in self._subjects.list_by_faculty(faculty_id)}
        if not handled:
            return {}

        week: WeekView = {}
        for day in SCHOOL_DAYS:
            week[day.value] = [
                TimetablePeriod(
                    period=n,
                    time=entry["time"],
                    subject_name=entry["name"] if index is None else FREE_PERIOD,
                    is_break=index is None,
                )
                for n, (entry, index) in enumerate(_teaching_slots(), start=1)
            ]

        positions = {index: n - 1 for n, (_, index) in enumerate(_teaching_slots(), start=1) if index is not None}
        timetables = self._timetables.list_all()
        class_names = {c.class_id: c.name for c in self._classes.get_many(t.class_id for t in timetables).values()}

        for timetable in timetables:
            for day in SCHOOL_DAYS:
                for index, subject_id in enumerate(timetable.schedule.get(day.value, [])):
                    subject = handled.get(subject_id)
                    if not subject or index not in positions:
                        continue
                    pos = positions[index]
                    current = week[day.value][pos]
                    week[day.value][pos] = TimetablePeriod(
                        period=current.period,
                        time=current.time,
                        subject_name=subject.name,
                        class_name=class_names.get(timetable.class_id),
                        is_break=False,
                    )
        return week


def week_to_dict(week: Optional[WeekView]) -> Optional[dict]:
    if week is None:
        return None
    return {day: [p.to_dict() for p in periods] for day, periods in week.items()}
