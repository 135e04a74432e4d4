from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .bio.mysql_bio_repository import MySQLBioRepository
from .bio.repository import BioRepository
from .bio.service import BioService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.repository import FeedbackRepository
from .feedback.service import FeedbackService
from .marks.mysql_marks_repository import MySQLMarksRepository
from .marks.repository import MarksRepository
from .marks.service import MarksService
from .reports.service import ReportService
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import SubjectService
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    classes_repo: ClassRepository
    subjects_repo: SubjectRepository
    timetable_repo: TimetableRepository
    attendance_repo: AttendanceRepository
    marks_repo: MarksRepository
    bio_repo: BioRepository
    events_repo: EventRepository
    feedback_repo: FeedbackRepository

    auth_service: AuthService
    user_service: UserService
    class_service: ClassService
    subject_service: SubjectService
    timetable_service: TimetableService
    attendance_service: AttendanceService
    marks_service: MarksService
    bio_service: BioService
    event_service: EventService
    feedback_service: FeedbackService
    report_service: ReportService


def wire(
    *,
    users_repo: UserRepository,
    classes_repo: ClassRepository,
    subjects_repo: SubjectRepository,
    timetable_repo: TimetableRepository,
    attendance_repo: AttendanceRepository,
    marks_repo: MarksRepository,
    bio_repo: BioRepository,
    events_repo: EventRepository,
    feedback_repo: FeedbackRepository,
) -> Container:
    """Build every service on top of the given repositories."""

    event_service = EventService(events_repo, classes_repo, users_repo)

    return Container(
        users_repo=users_repo,
        classes_repo=classes_repo,
        subjects_repo=subjects_repo,
        timetable_repo=timetable_repo,
        attendance_repo=attendance_repo,
        marks_repo=marks_repo,
        bio_repo=bio_repo,
        events_repo=events_repo,
        feedback_repo=feedback_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, classes_repo, subjects_repo),
        class_service=ClassService(classes_repo, users_repo, timetable_repo),
        subject_service=SubjectService(subjects_repo, classes_repo, users_repo),
        timetable_service=TimetableService(timetable_repo, classes_repo, subjects_repo, users_repo),
        attendance_service=AttendanceService(attendance_repo, subjects_repo),
        marks_service=MarksService(marks_repo, subjects_repo),
        bio_service=BioService(bio_repo, users_repo),
        event_service=event_service,
        feedback_service=FeedbackService(feedback_repo, subjects_repo),
        report_service=ReportService(
            users=users_repo,
            classes=classes_repo,
            subjects=subjects_repo,
            attendance=attendance_repo,
            marks=marks_repo,
            feedback=feedback_repo,
            events=event_service,
        ),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        subjects_repo=MySQLSubjectRepository(conn),
        timetable_repo=MySQLTimetableRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        marks_repo=MySQLMarksRepository(conn),
        bio_repo=MySQLBioRepository(conn),
        events_repo=MySQLEventRepository(conn),
        feedback_repo=MySQLFeedbackRepository(conn),
    )
