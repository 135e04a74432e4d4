from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..common.validators import parse_id, parse_iso_date, require_non_empty
from ..core.exceptions import ValidationError
from ..subjects.repository import SubjectRepository
from .model import AttendanceEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: faculty records presence for one subject session."""

    def __init__(self, attendance: AttendanceRepository, subjects: SubjectRepository):
        self._attendance = attendance
        self._subjects = subjects

    def save_batch(
        self,
        *,
        subject_id,
        class_id,
        on_date,
        period,
        records: Iterable[Mapping],
    ) -> int:
        subject_id = parse_id(subject_id, "subject ID")
        class_id = parse_id(class_id, "class ID")
        day = parse_iso_date(on_date)
        period = require_non_empty(str(period or ""), "Period")

        subject = self._subjects.get_by_id(subject_id)
        if not subject or subject.class_id != class_id:
            raise ValidationError("Invalid subject or class ID.")

        entries = []
        for r in records or []:
            if r.get("studentId") is None:
                continue
            entries.append(
                AttendanceEntry(student_id=parse_id(r["studentId"], "student ID"), is_present=bool(r.get("isPresent")))
            )
        if not entries:
            raise ValidationError("No attendance records to save.")

        written = self._attendance.upsert_batch(
            subject_id=subject_id, class_id=class_id, on_date=day, period=period, entries=entries
        )
        logger.info("Recorded %s attendance marks for subject %s on %s (%s)", written, subject_id, day, period)
        return written
