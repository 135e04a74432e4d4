from __future__ import annotations

from typing import Optional, Protocol

from .model import StudentBio


class BioRepository(Protocol):
    def get_for_student(self, student_id: int) -> Optional[StudentBio]:
        raise NotImplementedError

    def upsert(self, bio: StudentBio) -> None:
        raise NotImplementedError
