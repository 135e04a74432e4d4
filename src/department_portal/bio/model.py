from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date

from ..core.enums import Community, Gender, Quota


@dataclass(frozen=True)
class StudentBio:
    """Personal record of a student; at most one per student."""

    student_id: int
    mobile_number: str
    email: str
    dob: date
    father_name: str
    father_occupation: str
    father_mobile_number: str
    gender: Gender
    address: str
    religion: str
    community: Community
    caste: str
    quota: Quota
    aadhar_number: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["dob"] = self.dob.isoformat()
        data["gender"] = self.gender.value
        data["community"] = self.community.value
        data["quota"] = self.quota.value
        return data
