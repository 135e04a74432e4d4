from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..classes.repository import ClassRepository
from ..common.validators import collect, parse_id, require_email, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from ..subjects.repository import SubjectRepository
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    role: Role
    class_id: Optional[int]


@dataclass(frozen=True)
class NewUser:
    name: str
    email: str
    password: str
    role: Role
    class_id: Optional[int] = None
    roll_no: Optional[str] = None
    incharge_of_classes: tuple[int, ...] = ()
    handling_subjects: tuple[int, ...] = ()


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str, role: Role) -> SessionUser:
        user = self._users.get_by_email((email or "").strip())
        if not user or user.role != role:
            raise AuthenticationError("No user found with this email and role.")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Incorrect password.")

        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return SessionUser(user_id=user.user_id, name=user.name, role=user.role, class_id=user.class_id)


class UserService:
    """Use case: manage accounts (admin) and own profile (everyone)."""

    def __init__(
        self,
        users: UserRepository,
        classes: Optional[ClassRepository] = None,
        subjects: Optional[SubjectRepository] = None,
    ):
        self._users = users
        self._classes = classes
        self._subjects = subjects

    def _require_class(self, class_id: Optional[int]) -> int:
        if class_id is None:
            raise ValidationError("A class must be selected for students.")
        class_id = parse_id(class_id, "class ID")
        if self._classes and not self._classes.get_by_id(class_id):
            raise NotFoundError("Selected class does not exist.")
        return class_id

    def add_user(self, *, current_role: Role, data: NewUser) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to add users.")

        collect(
            [
                lambda: require_min_length(data.name, "Username", 2),
                lambda: require_email(data.email),
                lambda: require_min_length(data.password, "Password", MIN_PASSWORD_LENGTH),
            ]
        )
        if data.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created from this screen.")

        name = data.name.strip()
        email = data.email.strip()
        if self._users.get_by_name(name):
            raise ConflictError("Username already in use.")
        if self._users.get_by_email(email):
            raise ConflictError("Email already in use.")

        class_id = self._require_class(data.class_id) if data.role == Role.STUDENT else None

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(data.password),
            role=data.role,
            class_id=class_id,
            roll_no=(data.roll_no or "").strip() or None,
        )

        if data.role == Role.FACULTY:
            self._assign_faculty(user_id, data.incharge_of_classes, data.handling_subjects)

        logger.info("Created %s account %s", data.role.value, user_id)
        return user_id

    def _assign_faculty(self, faculty_id: int, class_ids: Iterable[int], subject_ids: Iterable[int]) -> None:
        for class_id in class_ids:
            if self._classes and not self._classes.set_incharge(class_id=parse_id(class_id, "class ID"), faculty_id=faculty_id):
                logger.warning("Class %s not found while assigning in-charge %s", class_id, faculty_id)
        for subject_id in subject_ids:
            if self._subjects and not self._subjects.set_faculty(subject_id=parse_id(subject_id, "subject ID"), faculty_id=faculty_id):
                logger.warning("Subject %s not found while assigning faculty %s", subject_id, faculty_id)

    def update_user(
        self,
        *,
        current_role: Role,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        class_id: Optional[int] = None,
        incharge_of_classes: Iterable[int] = (),
        handling_subjects: Iterable[int] = (),
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to edit users.")

        user = self._users.get_by_id(parse_id(user_id, "user ID"))
        if not user:
            raise NotFoundError("User not found.")

        checks = []
        if name is not None:
            checks.append(lambda: require_min_length(name, "Username", 2))
        if email is not None:
            checks.append(lambda: require_email(email))
        if password:
            checks.append(lambda: require_min_length(password, "Password", MIN_PASSWORD_LENGTH))
        collect(checks)

        new_name = name.strip() if name is not None else user.name
        new_email = email.strip() if email is not None else user.email
        if new_name != user.name and self._users.get_by_name(new_name):
            raise ConflictError("Username already in use.")
        if new_email != user.email and self._users.get_by_email(new_email):
            raise ConflictError("Email already in use.")

        new_class = user.class_id
        if user.role == Role.STUDENT and class_id is not None:
            new_class = self._require_class(class_id)

        self._users.update_user(
            user_id=user.user_id,
            name=new_name,
            email=new_email,
            class_id=new_class,
            password_hash=generate_password_hash(password) if password else None,
        )

        if user.role == Role.FACULTY:
            self._assign_faculty(user.user_id, incharge_of_classes, handling_subjects)

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to delete users.")

        user = self._users.get_by_id(parse_id(user_id, "user ID"))
        if not user:
            raise NotFoundError("User not found.")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted.")

        if user.role == Role.FACULTY and self._classes and self._classes.list_by_incharge(user.user_id):
            raise ConflictError("Cannot delete faculty who is in charge of a class.")
        if user.role == Role.FACULTY and self._subjects and self._subjects.list_by_faculty(user.user_id):
            raise ConflictError("Cannot delete faculty who is handling subjects.")

        if not self._users.delete_by_id(user.user_id):
            raise NotFoundError("User not found.")
        logger.info("Deleted user %s", user.user_id)

    def update_profile(self, *, user_id: int, name: str) -> None:
        name = require_min_length(name, "Name", 2)
        user = self._users.get_by_id(parse_id(user_id, "user ID"))
        if not user:
            raise NotFoundError("User not found.")

        if name != user.name:
            if self._users.get_by_name(name):
                raise ConflictError("Username already in use.")
            self._users.update_user(user_id=user.user_id, name=name, email=user.email, class_id=user.class_id)

    def change_password(self, *, user_id: int, current_password: str, new_password: str) -> None:
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)
        user = self._users.get_by_id(parse_id(user_id, "user ID"))
        if not user:
            raise NotFoundError("User not found.")

        if not check_password_hash(user.password_hash, current_password or ""):
            raise ValidationError("Incorrect current password.")

        self._users.update_user(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            class_id=user.class_id,
            password_hash=generate_password_hash(new_password),
        )

    def list_users(self, role: Role) -> list[dict]:
        return [u.public_dict() for u in self._users.list_by_role(role)]
