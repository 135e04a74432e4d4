from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import MarkEntry, MarkRecord


class MarksRepository(Protocol):
    def upsert_batch(
        self,
        *,
        subject_id: int,
        class_id: int,
        assessment_name: str,
        entries: Iterable[MarkEntry],
    ) -> int:
        raise NotImplementedError

    def list_for_assessment(self, *, subject_id: int, assessment_name: str) -> Sequence[MarkRecord]:
        raise NotImplementedError

    def list_assessments(self, subject_id: int) -> Sequence[str]:
        """Distinct assessment names of a subject, sorted."""

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[MarkRecord]:
        """Newest first."""

        raise NotImplementedError

    def list_for_class_subject(
        self, *, class_id: int, subject_id: int, assessment_name: Optional[str] = None
    ) -> Sequence[MarkRecord]:
        raise NotImplementedError
