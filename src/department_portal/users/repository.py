from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_many(self, user_ids: Iterable[int]) -> Dict[int, User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        class_id: Optional[int] = None,
        roll_no: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_user(
        self,
        *,
        user_id: int,
        name: str,
        email: str,
        class_id: Optional[int],
        password_hash: Optional[str] = None,
    ) -> bool:
        """Update account fields; the password is only changed when a hash is given."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_students_in_class(self, class_id: int) -> Sequence[User]:
        """Students of a class ordered by roll number, then name."""

        raise NotImplementedError

    def count_students_in_class(self, class_id: int) -> int:
        raise NotImplementedError
