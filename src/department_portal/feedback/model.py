from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Feedback:
    feedback_id: int
    student_id: Optional[int]
    faculty_id: int
    subject_id: int
    feedback_text: str
    submitted_at: datetime
    is_read: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.feedback_id,
            "student_id": self.student_id,
            "faculty_id": self.faculty_id,
            "subject_id": self.subject_id,
            "feedback_text": self.feedback_text,
            "submitted_at": self.submitted_at.isoformat(),
            "is_read": self.is_read,
        }
