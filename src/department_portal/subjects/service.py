from __future__ import annotations

import logging

from ..classes.repository import ClassRepository
from ..common.validators import collect, parse_id, require_min_length
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .repository import SubjectRepository

logger = logging.getLogger(__name__)


class SubjectService:
    def __init__(self, subjects: SubjectRepository, classes: ClassRepository, users: UserRepository):
        self._subjects = subjects
        self._classes = classes
        self._users = users

    def _validate(self, name: str, code: str, class_id, faculty_id) -> tuple[str, str, int, int]:
        collect(
            [
                lambda: require_min_length(name, "Subject name", 3),
                lambda: require_min_length(code, "Subject code", 3),
                lambda: parse_id(class_id, "class ID"),
                lambda: parse_id(faculty_id, "faculty ID"),
            ]
        )
        class_id = parse_id(class_id, "class ID")
        faculty_id = parse_id(faculty_id, "faculty ID")

        if not self._classes.get_by_id(class_id):
            raise ValidationError("Selected class does not exist.")
        faculty = self._users.get_by_id(faculty_id)
        if not faculty or faculty.role != Role.FACULTY:
            raise ValidationError("Selected faculty does not exist.")
        return name.strip(), code.strip(), class_id, faculty_id

    def create_subject(self, *, name: str, code: str, class_id, faculty_id) -> int:
        name, code, class_id, faculty_id = self._validate(name, code, class_id, faculty_id)
        if self._subjects.get_by_code(code):
            raise ConflictError("A subject with this code already exists.")

        subject_id = self._subjects.create(name=name, code=code, class_id=class_id, faculty_id=faculty_id)
        logger.info("Created subject %s (%s)", subject_id, code)
        return subject_id

    def update_subject(self, *, subject_id, name: str, code: str, class_id, faculty_id) -> None:
        subject_id = parse_id(subject_id, "subject ID")
        name, code, class_id, faculty_id = self._validate(name, code, class_id, faculty_id)

        existing = self._subjects.get_by_code(code)
        if existing and existing.subject_id != subject_id:
            raise ConflictError("A subject with this code already exists.")

        if not self._subjects.update(
            subject_id=subject_id, name=name, code=code, class_id=class_id, faculty_id=faculty_id
        ):
            raise NotFoundError("Subject not found.")

    def delete_subject(self, subject_id) -> None:
        subject_id = parse_id(subject_id, "subject ID")
        if not self._subjects.delete(subject_id):
            raise NotFoundError("Subject not found.")
        logger.info("Deleted subject %s", subject_id)

    def list_subjects(self) -> list[dict]:
        return [s.to_dict() for s in self._subjects.list_all()]

    def list_by_class(self, class_id) -> list[dict]:
        return [s.to_dict() for s in self._subjects.list_by_class(parse_id(class_id, "class ID"))]

    def list_by_faculty(self, faculty_id) -> list[dict]:
        return [s.to_dict() for s in self._subjects.list_by_faculty(parse_id(faculty_id, "faculty ID"))]
