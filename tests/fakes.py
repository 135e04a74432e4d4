from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional

from werkzeug.security import generate_password_hash

from department_portal.attendance.model import AttendanceEntry, AttendanceRecord
from department_portal.bio.model import StudentBio
from department_portal.classes.model import SchoolClass
from department_portal.container import Container, wire
from department_portal.core.enums import EventType, Role
from department_portal.events.model import Event
from department_portal.feedback.model import Feedback
from department_portal.marks.model import MarkEntry, MarkRecord
from department_portal.subjects.model import Subject
from department_portal.timetable.model import Timetable
from department_portal.users.model import User


class InMemoryUsers:
    def __init__(self):
        self.by_id: Dict[int, User] = {}
        self._id = 0

    def add(self, name: str, role: Role, *, password: str = "secret123", class_id=None, roll_no=None) -> User:
        user_id = self.create_user(
            name=name,
            email=f"{name}@dept.edu",
            password_hash=generate_password_hash(password, method="pbkdf2:sha256:1000"),
            role=role,
            class_id=class_id,
            roll_no=roll_no,
        )
        return self.by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(int(user_id))

    def get_by_name(self, name: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.name == name), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def get_many(self, user_ids: Iterable[int]):
        return {i: self.by_id[i] for i in user_ids if i in self.by_id}

    def create_user(self, *, name, email, password_hash, role, class_id=None, roll_no=None) -> int:
        self._id += 1
        self.by_id[self._id] = User(
            user_id=self._id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            class_id=class_id,
            roll_no=roll_no,
        )
        return self._id

    def update_user(self, *, user_id, name, email, class_id, password_hash=None) -> bool:
        user = self.by_id.get(user_id)
        if not user:
            return False
        self.by_id[user_id] = User(
            user_id=user_id,
            name=name,
            email=email,
            password_hash=password_hash or user.password_hash,
            role=user.role,
            class_id=class_id,
            roll_no=user.roll_no,
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self.by_id.pop(user_id, None) is not None

    def count_by_role(self, role: Role) -> int:
        return len(self.list_by_role(role))

    def list_by_role(self, role: Role):
        return sorted((u for u in self.by_id.values() if u.role == role), key=lambda u: u.name)

    def list_students_in_class(self, class_id: int):
        students = [u for u in self.by_id.values() if u.role == Role.STUDENT and u.class_id == class_id]
        return sorted(students, key=lambda u: (u.roll_no or "", u.name))

    def count_students_in_class(self, class_id: int) -> int:
        return len(self.list_students_in_class(class_id))


class InMemoryClasses:
    def __init__(self):
        self.by_id: Dict[int, SchoolClass] = {}
        self._id = 0

    def get_by_id(self, class_id: int):
        return self.by_id.get(int(class_id))

    def get_by_name(self, name: str):
        return next((c for c in self.by_id.values() if c.name == name), None)

    def get_many(self, class_ids):
        return {i: self.by_id[i] for i in class_ids if i in self.by_id}

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda c: c.name)

    def list_by_incharge(self, faculty_id: int):
        return [c for c in self.list_all() if c.incharge_faculty_id == faculty_id]

    def create(self, *, name, academic_year, incharge_faculty_id) -> int:
        self._id += 1
        self.by_id[self._id] = SchoolClass(self._id, name, academic_year, incharge_faculty_id)
        return self._id

    def update(self, *, class_id, name, academic_year, incharge_faculty_id) -> bool:
        if class_id not in self.by_id:
            return False
        self.by_id[class_id] = SchoolClass(class_id, name, academic_year, incharge_faculty_id)
        return True

    def set_incharge(self, *, class_id, faculty_id) -> bool:
        c = self.by_id.get(class_id)
        if not c:
            return False
        self.by_id[class_id] = SchoolClass(c.class_id, c.name, c.academic_year, faculty_id)
        return True

    def delete(self, class_id: int) -> bool:
        return self.by_id.pop(class_id, None) is not None


class InMemorySubjects:
    def __init__(self):
        self.by_id: Dict[int, Subject] = {}
        self._id = 0

    def get_by_id(self, subject_id: int):
        return self.by_id.get(int(subject_id))

    def get_by_code(self, code: str):
        return next((s for s in self.by_id.values() if s.code == code), None)

    def get_many(self, subject_ids):
        return {i: self.by_id[i] for i in subject_ids if i in self.by_id}

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda s: s.name)

    def list_by_class(self, class_id: int):
        return [s for s in self.list_all() if s.class_id == class_id]

    def list_by_faculty(self, faculty_id: int):
        return [s for s in self.list_all() if s.faculty_id == faculty_id]

    def create(self, *, name, code, class_id, faculty_id) -> int:
        self._id += 1
        self.by_id[self._id] = Subject(self._id, name, code, class_id, faculty_id)
        return self._id

    def update(self, *, subject_id, name, code, class_id, faculty_id) -> bool:
        if subject_id not in self.by_id:
            return False
        self.by_id[subject_id] = Subject(subject_id, name, code, class_id, faculty_id)
        return True

    def set_faculty(self, *, subject_id, faculty_id) -> bool:
        s = self.by_id.get(subject_id)
        if not s:
            return False
        self.by_id[subject_id] = Subject(s.subject_id, s.name, s.code, s.class_id, faculty_id)
        return True

    def delete(self, subject_id: int) -> bool:
        return self.by_id.pop(subject_id, None) is not None


class InMemoryTimetables:
    def __init__(self):
        self.by_class: Dict[int, Timetable] = {}

    def get_for_class(self, class_id: int):
        return self.by_class.get(class_id)

    def list_all(self):
        return list(self.by_class.values())

    def save(self, *, class_id, schedule) -> None:
        self.by_class[class_id] = Timetable(class_id=class_id, schedule={d: list(s) for d, s in schedule.items()})

    def delete_for_class(self, class_id: int) -> bool:
        return self.by_class.pop(class_id, None) is not None


class FailingTimetables(InMemoryTimetables):
    def get_for_class(self, class_id: int):
        raise RuntimeError("database unavailable")

    def list_all(self):
        raise RuntimeError("database unavailable")


class InMemoryAttendance:
    def __init__(self):
        # keyed by the natural unique key, like the UNIQUE index in MySQL
        self.records: Dict[tuple, AttendanceRecord] = {}

    def upsert_batch(self, *, subject_id, class_id, on_date, period, entries: Iterable[AttendanceEntry]) -> int:
        n = 0
        for e in entries:
            self.records[(e.student_id, subject_id, on_date, period)] = AttendanceRecord(
                student_id=e.student_id,
                subject_id=subject_id,
                class_id=class_id,
                date=on_date,
                period=period,
                is_present=e.is_present,
            )
            n += 1
        return n

    def list_for_student(self, student_id: int):
        return [r for r in self.records.values() if r.student_id == student_id]

    def list_for_class_subject(self, *, class_id, subject_id):
        return [r for r in self.records.values() if r.class_id == class_id and r.subject_id == subject_id]


class FailingAttendance(InMemoryAttendance):
    def list_for_student(self, student_id: int):
        raise RuntimeError("database unavailable")

    def list_for_class_subject(self, *, class_id, subject_id):
        raise RuntimeError("database unavailable")


class InMemoryMarks:
    def __init__(self):
        self.records: Dict[tuple, MarkRecord] = {}
        self._clock = datetime(2026, 1, 1, 9, 0)

    def upsert_batch(self, *, subject_id, class_id, assessment_name, entries: Iterable[MarkEntry]) -> int:
        n = 0
        for e in entries:
            self._clock += timedelta(minutes=1)
            self.records[(e.student_id, subject_id, assessment_name)] = MarkRecord(
                student_id=e.student_id,
                subject_id=subject_id,
                class_id=class_id,
                assessment_name=assessment_name,
                marks_obtained=e.marks_obtained,
                max_marks=e.max_marks,
                recorded_at=self._clock,
            )
            n += 1
        return n

    def add(self, student_id, subject_id, class_id, assessment_name, obtained, maximum) -> None:
        self.upsert_batch(
            subject_id=subject_id,
            class_id=class_id,
            assessment_name=assessment_name,
            entries=[MarkEntry(student_id=student_id, marks_obtained=obtained, max_marks=maximum)],
        )

    def list_for_assessment(self, *, subject_id, assessment_name):
        return [r for r in self.records.values() if r.subject_id == subject_id and r.assessment_name == assessment_name]

    def list_assessments(self, subject_id: int):
        return sorted({r.assessment_name for r in self.records.values() if r.subject_id == subject_id})

    def list_for_student(self, student_id: int):
        rows = [r for r in self.records.values() if r.student_id == student_id]
        return sorted(rows, key=lambda r: r.recorded_at, reverse=True)

    def list_for_class_subject(self, *, class_id, subject_id, assessment_name=None):
        return [
            r
            for r in self.records.values()
            if r.class_id == class_id
            and r.subject_id == subject_id
            and (assessment_name is None or r.assessment_name == assessment_name)
        ]


class InMemoryBios:
    def __init__(self):
        self.by_student: Dict[int, StudentBio] = {}

    def get_for_student(self, student_id: int):
        return self.by_student.get(student_id)

    def upsert(self, bio: StudentBio) -> None:
        self.by_student[bio.student_id] = bio


class InMemoryEvents:
    def __init__(self):
        self.by_id: Dict[int, Event] = {}
        self._id = 0

    def create(self, *, title, date, description, type, location, incharge_faculty_id, class_ids) -> int:
        self._id += 1
        self.by_id[self._id] = Event(
            event_id=self._id,
            title=title,
            date=date,
            description=description,
            type=type,
            location=location,
            incharge_faculty_id=incharge_faculty_id,
            class_ids=tuple(sorted(set(class_ids))),
        )
        return self._id

    def add(self, title: str, when: datetime, *, class_ids=(), incharge_faculty_id=None) -> int:
        return self.create(
            title=title,
            date=when,
            description="Details to follow for everyone.",
            type=EventType.NOTICE,
            location="Main Hall",
            incharge_faculty_id=incharge_faculty_id,
            class_ids=class_ids,
        )

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda e: e.date, reverse=True)

    def list_upcoming(self, since: datetime):
        return sorted((e for e in self.by_id.values() if e.date >= since), key=lambda e: e.date)


class InMemoryFeedback:
    def __init__(self):
        self.by_id: Dict[int, Feedback] = {}
        self._id = 0

    def create(self, *, student_id, faculty_id, subject_id, feedback_text) -> int:
        self._id += 1
        self.by_id[self._id] = Feedback(
            feedback_id=self._id,
            student_id=student_id,
            faculty_id=faculty_id,
            subject_id=subject_id,
            feedback_text=feedback_text,
            submitted_at=datetime(2026, 1, 1, 9, 0) + timedelta(minutes=self._id),
        )
        return self._id

    def _unread(self, faculty_id: int):
        rows = [f for f in self.by_id.values() if f.faculty_id == faculty_id and not f.is_read]
        return sorted(rows, key=lambda f: f.submitted_at, reverse=True)

    def list_unread_for_faculty(self, faculty_id: int, *, limit: int):
        return self._unread(faculty_id)[:limit]

    def count_unread_for_faculty(self, faculty_id: int) -> int:
        return len(self._unread(faculty_id))

    def mark_read(self, *, feedback_id, faculty_id) -> bool:
        f = self.by_id.get(feedback_id)
        if not f or f.faculty_id != faculty_id:
            return False
        self.by_id[feedback_id] = Feedback(
            feedback_id=f.feedback_id,
            student_id=f.student_id,
            faculty_id=f.faculty_id,
            subject_id=f.subject_id,
            feedback_text=f.feedback_text,
            submitted_at=f.submitted_at,
            is_read=True,
        )
        return True


def build_fake_container(**overrides) -> Container:
    repos = dict(
        users_repo=InMemoryUsers(),
        classes_repo=InMemoryClasses(),
        subjects_repo=InMemorySubjects(),
        timetable_repo=InMemoryTimetables(),
        attendance_repo=InMemoryAttendance(),
        marks_repo=InMemoryMarks(),
        bio_repo=InMemoryBios(),
        events_repo=InMemoryEvents(),
        feedback_repo=InMemoryFeedback(),
    )
    repos.update(overrides)
    return wire(**repos)


def login(client, email: str, password: str, role: str):
    return client.post("/login", json={"email": email, "password": password, "role": role})
