from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account.

    Note: Plain data object, no DB access code here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    class_id: Optional[int] = None
    roll_no: Optional[str] = None

    def public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "class_id": self.class_id,
            "roll_no": self.roll_no,
        }
