from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import collect, parse_id, require_min_length, require_pattern
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..timetable.repository import TimetableRepository
from ..users.repository import UserRepository
from .model import SchoolClass
from .repository import ClassRepository

logger = logging.getLogger(__name__)

_ACADEMIC_YEAR_RE = r"\d{4}-\d{4}"


class ClassService:
    def __init__(self, classes: ClassRepository, users: UserRepository, timetables: TimetableRepository):
        self._classes = classes
        self._users = users
        self._timetables = timetables

    def _validate(self, name: str, academic_year: str, incharge_faculty_id) -> tuple[str, str, int]:
        collect(
            [
                lambda: require_min_length(name, "Class name", 3),
                lambda: require_pattern(academic_year, _ACADEMIC_YEAR_RE, "Academic year must be in YYYY-YYYY format."),
                lambda: parse_id(incharge_faculty_id, "in-charge faculty"),
            ]
        )
        faculty_id = parse_id(incharge_faculty_id, "in-charge faculty")
        faculty = self._users.get_by_id(faculty_id)
        if not faculty or faculty.role != Role.FACULTY:
            raise ValidationError("Selected in-charge faculty does not exist.")
        return name.strip(), academic_year.strip(), faculty_id

    def create_class(self, *, name: str, academic_year: str, incharge_faculty_id) -> int:
        name, academic_year, faculty_id = self._validate(name, academic_year, incharge_faculty_id)
        if self._classes.get_by_name(name):
            raise ConflictError("A class with this name already exists.")

        class_id = self._classes.create(name=name, academic_year=academic_year, incharge_faculty_id=faculty_id)
        logger.info("Created class %s (%s)", class_id, name)
        return class_id

    def update_class(self, *, class_id, name: str, academic_year: str, incharge_faculty_id) -> None:
        class_id = parse_id(class_id, "class ID")
        name, academic_year, faculty_id = self._validate(name, academic_year, incharge_faculty_id)

        existing = self._classes.get_by_name(name)
        if existing and existing.class_id != class_id:
            raise ConflictError("A class with this name already exists.")

        if not self._classes.update(
            class_id=class_id, name=name, academic_year=academic_year, incharge_faculty_id=faculty_id
        ):
            raise NotFoundError("Class not found.")

    def delete_class(self, class_id) -> None:
        class_id = parse_id(class_id, "class ID")
        if not self._classes.get_by_id(class_id):
            raise NotFoundError("Class not found.")

        students = self._users.count_students_in_class(class_id)
        if students > 0:
            raise ConflictError(f"Cannot delete class. There are {students} student(s) assigned to it.")

        self._timetables.delete_for_class(class_id)
        if not self._classes.delete(class_id):
            raise NotFoundError("Class not found.")
        logger.info("Deleted class %s", class_id)

    def get_class(self, class_id) -> Optional[SchoolClass]:
        return self._classes.get_by_id(parse_id(class_id, "class ID"))

    def list_classes(self) -> list[dict]:
        """Every class with its student count and in-charge faculty name."""

        classes = self._classes.list_all()
        faculty = self._users.get_many(c.incharge_faculty_id for c in classes)
        out = []
        for c in classes:
            row = c.to_dict()
            incharge = faculty.get(c.incharge_faculty_id)
            row["incharge_faculty_name"] = incharge.name if incharge else None
            row["student_count"] = self._users.count_students_in_class(c.class_id)
            out.append(row)
        return out

    def list_students(self, class_id) -> list[dict]:
        class_id = parse_id(class_id, "class ID")
        return [u.public_dict() for u in self._users.list_students_in_class(class_id)]
