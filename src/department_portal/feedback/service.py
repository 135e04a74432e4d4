from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import parse_id, require_non_empty
from ..core.constants import RECENT_FEEDBACK_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..subjects.repository import SubjectRepository
from .model import Feedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, feedback: FeedbackRepository, subjects: SubjectRepository):
        self._feedback = feedback
        self._subjects = subjects

    def submit(self, *, student_id: Optional[int], faculty_id, subject_id, feedback_text: str) -> int:
        """Store feedback for the faculty of a subject; ``student_id`` may be None for anonymous."""

        faculty_id = parse_id(faculty_id, "faculty ID")
        subject_id = parse_id(subject_id, "subject ID")
        text = require_non_empty(feedback_text or "", "Feedback")

        subject = self._subjects.get_by_id(subject_id)
        if not subject or subject.faculty_id != faculty_id:
            raise ValidationError("Selected faculty does not handle this subject.")

        feedback_id = self._feedback.create(
            student_id=student_id, faculty_id=faculty_id, subject_id=subject_id, feedback_text=text
        )
        logger.info("Feedback %s submitted for faculty %s", feedback_id, faculty_id)
        return feedback_id

    def recent_unread(self, faculty_id, *, limit: int = RECENT_FEEDBACK_LIMIT) -> Sequence[Feedback]:
        return self._feedback.list_unread_for_faculty(parse_id(faculty_id, "faculty ID"), limit=limit)

    def unread_count(self, faculty_id) -> int:
        return self._feedback.count_unread_for_faculty(parse_id(faculty_id, "faculty ID"))

    def mark_read(self, *, faculty_id, feedback_id) -> None:
        if not self._feedback.mark_read(
            feedback_id=parse_id(feedback_id, "feedback ID"), faculty_id=parse_id(faculty_id, "faculty ID")
        ):
            raise NotFoundError("Feedback not found.")
