from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Feedback


class FeedbackRepository(Protocol):
    def create(self, *, student_id: Optional[int], faculty_id: int, subject_id: int, feedback_text: str) -> int:
        raise NotImplementedError

    def list_unread_for_faculty(self, faculty_id: int, *, limit: int) -> Sequence[Feedback]:
        """Newest first."""

        raise NotImplementedError

    def count_unread_for_faculty(self, faculty_id: int) -> int:
        raise NotImplementedError

    def mark_read(self, *, feedback_id: int, faculty_id: int) -> bool:
        raise NotImplementedError
