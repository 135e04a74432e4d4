from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Subject]:
        raise NotImplementedError

    def get_many(self, subject_ids: Iterable[int]) -> Dict[int, Subject]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def list_by_class(self, class_id: int) -> Sequence[Subject]:
        raise NotImplementedError

    def list_by_faculty(self, faculty_id: int) -> Sequence[Subject]:
        raise NotImplementedError

    def create(self, *, name: str, code: str, class_id: int, faculty_id: int) -> int:
        raise NotImplementedError

    def update(self, *, subject_id: int, name: str, code: str, class_id: int, faculty_id: int) -> bool:
        raise NotImplementedError

    def set_faculty(self, *, subject_id: int, faculty_id: int) -> bool:
        raise NotImplementedError

    def delete(self, subject_id: int) -> bool:
        raise NotImplementedError
