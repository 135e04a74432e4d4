from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..common.validators import (
    collect,
    parse_id,
    parse_iso_date,
    require_choice,
    require_email,
    require_min_length,
    require_pattern,
)
from ..core.enums import Community, Gender, Quota, Role
from ..core.exceptions import NotFoundError
from ..users.repository import UserRepository
from .model import StudentBio
from .repository import BioRepository

logger = logging.getLogger(__name__)

_AADHAR_RE = r"\d{4} \d{4} \d{4}"


class BioService:
    def __init__(self, bios: BioRepository, users: UserRepository):
        self._bios = bios
        self._users = users

    def save_bio(self, *, student_id, data: Mapping) -> None:
        """Validate the whole form, then create or replace the student's record."""

        student_id = parse_id(student_id, "student ID")
        student = self._users.get_by_id(student_id)
        if not student or student.role != Role.STUDENT:
            raise NotFoundError("Student not found.")

        def g(key: str) -> str:
            return str(data.get(key) or "")

        collect(
            [
                lambda: require_min_length(g("mobileNumber"), "Mobile number", 10),
                lambda: require_email(g("email")),
                lambda: parse_iso_date(g("dob"), "date of birth"),
                lambda: require_min_length(g("fatherName"), "Father's name", 2),
                lambda: require_min_length(g("fatherOccupation"), "Father's occupation", 2),
                lambda: require_min_length(g("fatherMobileNumber"), "Father's mobile number", 10),
                lambda: require_choice(g("gender"), Gender, "Please select a gender."),
                lambda: require_min_length(g("address"), "Address", 10),
                lambda: require_min_length(g("religion"), "Religion", 2),
                lambda: require_choice(g("community"), Community, "Please select a community."),
                lambda: require_min_length(g("caste"), "Caste", 2),
                lambda: require_choice(g("quota"), Quota, "Please select a quota."),
                lambda: require_pattern(g("aadharNumber"), _AADHAR_RE, "Aadhar number must be in XXXX XXXX XXXX format."),
            ]
        )

        bio = StudentBio(
            student_id=student_id,
            mobile_number=g("mobileNumber").strip(),
            email=g("email").strip(),
            dob=parse_iso_date(g("dob"), "date of birth"),
            father_name=g("fatherName").strip(),
            father_occupation=g("fatherOccupation").strip(),
            father_mobile_number=g("fatherMobileNumber").strip(),
            gender=Gender(g("gender")),
            address=g("address").strip(),
            religion=g("religion").strip(),
            community=Community(g("community")),
            caste=g("caste").strip(),
            quota=Quota(g("quota")),
            aadhar_number=g("aadharNumber").strip().replace(" ", ""),
        )
        self._bios.upsert(bio)
        logger.info("Saved bio-data for student %s", student_id)

    def get_bio(self, student_id) -> Optional[StudentBio]:
        return self._bios.get_for_student(parse_id(student_id, "student ID"))
