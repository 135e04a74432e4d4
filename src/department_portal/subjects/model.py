from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Subject:
    """Domain entity: a subject taught to one class by one faculty member."""

    subject_id: int
    name: str
    code: str
    class_id: int
    faculty_id: int

    def to_dict(self) -> dict:
        return {
            "id": self.subject_id,
            "name": self.name,
            "code": self.code,
            "class_id": self.class_id,
            "faculty_id": self.faculty_id,
        }
