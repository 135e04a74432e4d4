from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..common.validators import parse_id, require_non_empty
from ..core.exceptions import ValidationError
from ..subjects.repository import SubjectRepository
from .model import MarkEntry
from .repository import MarksRepository

logger = logging.getLogger(__name__)


def _to_number(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}.")
    if number < 0:
        raise ValidationError(f"Invalid {field_name}.")
    return number


class MarksService:
    def __init__(self, marks: MarksRepository, subjects: SubjectRepository):
        self._marks = marks
        self._subjects = subjects

    def save_marks(self, *, subject_id, class_id, assessment_name: str, entries: Iterable[Mapping]) -> int:
        """Create or overwrite marks of one assessment; entries with a missing value are skipped."""

        try:
            subject_id = parse_id(subject_id, "subject ID")
            class_id = parse_id(class_id, "class ID")
        except ValidationError:
            raise ValidationError("Invalid subject or class ID.")
        subject = self._subjects.get_by_id(subject_id)
        if not subject or subject.class_id != class_id:
            raise ValidationError("Invalid subject or class ID.")
        assessment_name = require_non_empty(assessment_name or "", "Assessment name")

        batch = []
        for e in entries or []:
            obtained, max_marks = e.get("marksObtained"), e.get("maxMarks")
            if e.get("studentId") is None or obtained in (None, "") or max_marks in (None, ""):
                continue
            batch.append(
                MarkEntry(
                    student_id=parse_id(e["studentId"], "student ID"),
                    marks_obtained=_to_number(obtained, "marks obtained"),
                    max_marks=_to_number(max_marks, "maximum marks"),
                )
            )

        written = self._marks.upsert_batch(
            subject_id=subject_id, class_id=class_id, assessment_name=assessment_name, entries=batch
        )
        logger.info("Saved %s marks for subject %s assessment %r", written, subject_id, assessment_name)
        return written

    def get_marks_for_assessment(self, *, subject_id, assessment_name: str) -> list[dict]:
        subject_id = parse_id(subject_id, "subject ID")
        assessment_name = require_non_empty(assessment_name or "", "Assessment name")
        return [m.to_dict() for m in self._marks.list_for_assessment(subject_id=subject_id, assessment_name=assessment_name)]

    def list_assessments(self, subject_id) -> list[str]:
        return list(self._marks.list_assessments(parse_id(subject_id, "subject ID")))
