from __future__ import annotations

from dataclasses import dataclass

import pytest

from department_portal.container import Container
from department_portal.core.enums import Role
from department_portal.main import create_app
from department_portal.users.model import User

from fakes import build_fake_container


@dataclass
class School:
    """A small department: one class run by one faculty member, two subjects, two students."""

    admin: User
    faculty: User
    other_faculty: User
    class_id: int
    maths_id: int
    physics_id: int
    alice: User
    bob: User


@pytest.fixture
def container() -> Container:
    return build_fake_container()


@pytest.fixture
def school(container) -> School:
    users = container.users_repo
    admin = users.add("admin", Role.ADMIN, password="admin123")
    faculty = users.add("dr.rao", Role.FACULTY, password="faculty123")
    other = users.add("dr.iyer", Role.FACULTY)

    class_id = container.classes_repo.create(name="CSE-A", academic_year="2025-2026", incharge_faculty_id=faculty.user_id)
    maths = container.subjects_repo.create(name="Mathematics", code="MA101", class_id=class_id, faculty_id=faculty.user_id)
    physics = container.subjects_repo.create(name="Physics", code="PH101", class_id=class_id, faculty_id=other.user_id)

    alice = users.add("alice", Role.STUDENT, password="student123", class_id=class_id, roll_no="01")
    bob = users.add("bob", Role.STUDENT, class_id=class_id, roll_no="02")
    return School(admin, faculty, other, class_id, maths, physics, alice, bob)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()

