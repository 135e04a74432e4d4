from __future__ import annotations

from typing import Optional

from ..core.enums import Community, Gender, Quota
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import StudentBio
from .repository import BioRepository

_FIELDS = (
    "student_id",
    "mobile_number",
    "email",
    "dob",
    "father_name",
    "father_occupation",
    "father_mobile_number",
    "gender",
    "address",
    "religion",
    "community",
    "caste",
    "quota",
    "aadhar_number",
)


def _to_bio(row: dict) -> StudentBio:
    data = {f: row[f] for f in _FIELDS}
    data["student_id"] = int(row["student_id"])
    data["gender"] = Gender(row["gender"])
    data["community"] = Community(row["community"])
    data["quota"] = Quota(row["quota"])
    return StudentBio(**data)


class MySQLBioRepository(BioRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_student(self, student_id: int) -> Optional[StudentBio]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {', '.join(_FIELDS)} FROM student_bios WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_bio(row) if row else None

    def upsert(self, bio: StudentBio) -> None:
        values = bio.to_dict()
        updates = ", ".join(f"{f}=VALUES({f})" for f in _FIELDS[1:])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO student_bios({', '.join(_FIELDS)})
                VALUES({', '.join(['%s'] * len(_FIELDS))})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                tuple(values[f] for f in _FIELDS),
            )
