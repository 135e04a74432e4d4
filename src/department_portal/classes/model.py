from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a class (cohort) with one in-charge faculty member."""

    class_id: int
    name: str
    academic_year: str
    incharge_faculty_id: int

    def to_dict(self) -> dict:
        return {
            "id": self.class_id,
            "name": self.name,
            "academic_year": self.academic_year,
            "incharge_faculty_id": self.incharge_faculty_id,
        }
