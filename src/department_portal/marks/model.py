from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MarkRecord:
    """Score of one student in one assessment of a subject."""

    student_id: int
    subject_id: int
    class_id: int
    assessment_name: str
    marks_obtained: float
    max_marks: float
    recorded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "subject_id": self.subject_id,
            "class_id": self.class_id,
            "assessment_name": self.assessment_name,
            "marks_obtained": self.marks_obtained,
            "max_marks": self.max_marks,
            "recorded_at": self.recorded_at.isoformat() if self.recorded_at else None,
        }


@dataclass(frozen=True)
class MarkEntry:
    student_id: int
    marks_obtained: float
    max_marks: float
