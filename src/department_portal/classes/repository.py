from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[SchoolClass]:
        raise NotImplementedError

    def get_many(self, class_ids: Iterable[int]) -> Dict[int, SchoolClass]:
        raise NotImplementedError

    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def list_by_incharge(self, faculty_id: int) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def create(self, *, name: str, academic_year: str, incharge_faculty_id: int) -> int:
        raise NotImplementedError

    def update(self, *, class_id: int, name: str, academic_year: str, incharge_faculty_id: int) -> bool:
        raise NotImplementedError

    def set_incharge(self, *, class_id: int, faculty_id: int) -> bool:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        raise NotImplementedError
