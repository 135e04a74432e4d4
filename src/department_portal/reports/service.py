from __future__ import annotations

import logging
from collections import defaultdict
from operator import attrgetter
from typing import Callable, Dict, List, Optional, TypeVar

from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.validators import parse_id
from ..core.constants import (
    DISTRIBUTION_BANDS,
    PERFORMANCE_LIST_LIMIT,
    RECENT_FEEDBACK_LIMIT,
    TOP_THRESHOLD,
    WATCH_THRESHOLD,
)
from ..core.enums import Role, Trend
from ..core.exceptions import NotFoundError
from ..core.result import Result
from ..events.service import EventService
from ..feedback.repository import FeedbackRepository
from ..marks.repository import MarksRepository
from ..subjects.repository import SubjectRepository
from ..users.repository import UserRepository
from .grading.base import GradeCalculator
from .grading.standard_grade_calculator import StandardGradeCalculator
from .model import (
    AdminDashboard,
    ClassPerformance,
    DistributionBand,
    FacultyDashboard,
    MarkSheetRow,
    PerformanceFlag,
    PerformanceSummary,
    StudentAttendance,
    StudentDashboard,
    SubjectAttendance,
    SubjectScore,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def percentage(part: float, whole: float) -> float:
    """``part / whole * 100`` rounded to 2 dp; 0 when there is nothing to divide by."""

    if not whole or whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


def _band_for(pct: float) -> str:
    for label, upper in DISTRIBUTION_BANDS:
        if upper is None or pct < upper:
            return label
    return DISTRIBUTION_BANDS[-1][0]


def _fmt_number(value: float) -> str:
    return f"{value:g}"


def _is_single_assessment(assessment_name: Optional[str]) -> bool:
    return bool(assessment_name) and assessment_name != "all"


class ReportService:
    """Read-only aggregations over the attendance and marks ledgers.

    Every public method returns a ``Result``: failures are logged and answered
    with the zeroed value instead of raising.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        classes: ClassRepository,
        subjects: SubjectRepository,
        attendance: AttendanceRepository,
        marks: MarksRepository,
        feedback: FeedbackRepository,
        events: EventService,
        calculator: Optional[GradeCalculator] = None,
    ):
        self._users = users
        self._classes = classes
        self._subjects = subjects
        self._attendance = attendance
        self._marks = marks
        self._feedback = feedback
        self._events = events
        self._calculator = calculator or StandardGradeCalculator()

    def _run(self, what: str, empty: Callable[[], T], build: Callable[[], T]) -> Result[T]:
        try:
            return Result.success(build())
        except Exception as e:
            logger.exception("Failed to build %s", what)
            return Result.failure(empty(), str(e) or e.__class__.__name__)

    # ---- attendance ----

    def student_attendance(self, student_id) -> Result[List[SubjectAttendance]]:
        def build() -> List[SubjectAttendance]:
            records = self._attendance.list_for_student(parse_id(student_id, "student ID"))
            attended: Dict[int, int] = defaultdict(int)
            total: Dict[int, int] = defaultdict(int)
            for r in records:
                total[r.subject_id] += 1
                if r.is_present:
                    attended[r.subject_id] += 1

            subjects = self._subjects.get_many(total.keys())
            rows = [
                SubjectAttendance(
                    subject_id=sid,
                    subject_name=subjects[sid].name if sid in subjects else "Unknown Subject",
                    attended=attended[sid],
                    total=total[sid],
                    percentage=percentage(attended[sid], total[sid]),
                )
                for sid in total
            ]
            return sorted(rows, key=lambda r: r.subject_name)

        return self._run("student attendance", list, build)

    def overall_attendance_percentage(self, student_id) -> Result[float]:
        def build() -> float:
            records = self._attendance.list_for_student(parse_id(student_id, "student ID"))
            return percentage(sum(1 for r in records if r.is_present), len(records))

        return self._run("overall attendance", float, build)

    def class_attendance(self, *, class_id, subject_id) -> Result[List[StudentAttendance]]:
        """Per-student attendance of a class in one subject, roster order."""

        def build() -> List[StudentAttendance]:
            cid = parse_id(class_id, "class ID")
            sid = parse_id(subject_id, "subject ID")
            attended: Dict[int, int] = defaultdict(int)
            total: Dict[int, int] = defaultdict(int)
            for r in self._attendance.list_for_class_subject(class_id=cid, subject_id=sid):
                total[r.student_id] += 1
                if r.is_present:
                    attended[r.student_id] += 1

            return [
                StudentAttendance(
                    student_id=s.user_id,
                    name=s.name,
                    roll_no=s.roll_no,
                    attended=attended[s.user_id],
                    total=total[s.user_id],
                    percentage=percentage(attended[s.user_id], total[s.user_id]),
                )
                for s in self._users.list_students_in_class(cid)
            ]

        return self._run("class attendance", list, build)

    # ---- marks ----

    def class_performance(self, *, class_id, subject_id, assessment_name: Optional[str] = None) -> Result[ClassPerformance]:
        def build() -> ClassPerformance:
            cid = parse_id(class_id, "class ID")
            sid = parse_id(subject_id, "subject ID")
            single = _is_single_assessment(assessment_name)
            records = self._marks.list_for_class_subject(
                class_id=cid, subject_id=sid, assessment_name=assessment_name if single else None
            )
            if not records:
                return ClassPerformance()

            names = {uid: u.name for uid, u in self._users.get_many(r.student_id for r in records).items()}
            counts = {label: 0 for label, _ in DISTRIBUTION_BANDS}
            watch: List[PerformanceFlag] = []
            top: List[PerformanceFlag] = []
            average: List[PerformanceFlag] = []

            for r in records:
                if r.max_marks is None or r.max_marks <= 0:
                    logger.warning(
                        "Skipping mark of student %s in %r: max marks %s", r.student_id, r.assessment_name, r.max_marks
                    )
                    continue
                pct = r.marks_obtained / r.max_marks * 100
                counts[_band_for(pct)] += 1

                reason = f"Scored {pct:.1f}%" if single else f"Scored {pct:.1f}% in '{r.assessment_name}'"
                name = names.get(r.student_id, "Unknown Student")
                if pct < WATCH_THRESHOLD:
                    watch.append(PerformanceFlag(name=name, percentage=round(pct, 1), reason=reason, trend=Trend.DOWN))
                elif pct >= TOP_THRESHOLD:
                    top.append(PerformanceFlag(name=name, percentage=round(pct, 1), reason=reason, trend=Trend.UP))
                else:
                    average.append(PerformanceFlag(name=name, percentage=round(pct, 1), reason=reason, trend=Trend.STABLE))

            return ClassPerformance(
                distribution=[DistributionBand(range=label, count=n) for label, n in counts.items()],
                students_to_watch=sorted(watch, key=attrgetter("percentage"))[:PERFORMANCE_LIST_LIMIT],
                top_performers=sorted(top, key=attrgetter("percentage"), reverse=True)[:PERFORMANCE_LIST_LIMIT],
                average_performers=sorted(average, key=attrgetter("percentage"), reverse=True)[:PERFORMANCE_LIST_LIMIT],
            )

        return self._run("class performance", ClassPerformance, build)

    def student_performance(self, student_id) -> Result[PerformanceSummary]:
        def build() -> PerformanceSummary:
            records = self._marks.list_for_student(parse_id(student_id, "student ID"))
            if not records:
                return PerformanceSummary()

            obtained: Dict[int, float] = defaultdict(float)
            maximum: Dict[int, float] = defaultdict(float)
            for r in records:
                obtained[r.subject_id] += r.marks_obtained
                maximum[r.subject_id] += r.max_marks

            subjects = self._subjects.get_many(obtained.keys())
            scores = [
                SubjectScore(
                    subject_id=sid,
                    subject_name=subjects[sid].name if sid in subjects else "Unknown Subject",
                    percentage=percentage(obtained[sid], maximum[sid]),
                )
                for sid in obtained
            ]

            best = scores[0]
            worst = scores[0]
            for s in scores[1:]:
                if s.percentage > best.percentage:
                    best = s
                if s.percentage < worst.percentage:
                    worst = s

            return PerformanceSummary(
                subjects=scores,
                average_percentage=round(
                    sum(obtained[sid] / maximum[sid] * 100 if maximum[sid] > 0 else 0.0 for sid in obtained)
                    / len(obtained),
                    2,
                ),
                best_subject=best,
                needs_improvement=worst if len(scores) > 1 else None,
            )

        return self._run("student performance", PerformanceSummary, build)

    def student_mark_sheet(self, student_id) -> Result[List[MarkSheetRow]]:
        """Every mark of a student with its grade letter, newest first."""

        def build() -> List[MarkSheetRow]:
            records = self._marks.list_for_student(parse_id(student_id, "student ID"))
            subjects = self._subjects.get_many(r.subject_id for r in records)
            return [
                MarkSheetRow(
                    subject_id=r.subject_id,
                    subject_name=subjects[r.subject_id].name if r.subject_id in subjects else "Unknown Subject",
                    assessment_name=r.assessment_name,
                    marks_obtained=r.marks_obtained,
                    max_marks=r.max_marks,
                    grade=self._calculator.grade(r.marks_obtained, r.max_marks),
                )
                for r in records
            ]

        return self._run("student mark sheet", list, build)

    # ---- dashboards ----

    def admin_dashboard(self) -> Result[AdminDashboard]:
        def build() -> AdminDashboard:
            return AdminDashboard(
                student_count=self._users.count_by_role(Role.STUDENT),
                faculty_count=self._users.count_by_role(Role.FACULTY),
                upcoming_events=[e.to_dict() for e in self._events.upcoming()],
            )

        return self._run("admin dashboard", AdminDashboard, build)

    def faculty_dashboard(self, faculty_id) -> Result[FacultyDashboard]:
        def build() -> FacultyDashboard:
            fid = parse_id(faculty_id, "faculty ID")
            classes = self._classes.list_by_incharge(fid)
            subjects = self._subjects.list_by_faculty(fid)
            recent = self._feedback.list_unread_for_faculty(fid, limit=RECENT_FEEDBACK_LIMIT)
            return FacultyDashboard(
                classes_in_charge_count=len(classes),
                subjects_handled_count=len(subjects),
                unread_feedback_count=self._feedback.count_unread_for_faculty(fid),
                classes_in_charge=[c.to_dict() for c in classes],
                subjects_handled=[s.to_dict() for s in subjects],
                recent_feedback=[f.to_dict() for f in recent],
            )

        return self._run("faculty dashboard", FacultyDashboard, build)

    def student_dashboard(self, student_id) -> Result[StudentDashboard]:
        def build() -> StudentDashboard:
            sid = parse_id(student_id, "student ID")
            student = self._users.get_by_id(sid)
            if not student:
                raise NotFoundError("Student not found.")

            records = self._attendance.list_for_student(sid)
            marks = self._marks.list_for_student(sid)
            recent = marks[0] if marks else None
            upcoming = self._events.upcoming(role=Role.STUDENT, user_id=sid, class_id=student.class_id)
            return StudentDashboard(
                attendance_percentage=percentage(sum(1 for r in records if r.is_present), len(records)),
                recent_mark=(
                    f"{_fmt_number(recent.marks_obtained)} / {_fmt_number(recent.max_marks)}" if recent else "N/A"
                ),
                upcoming_events_count=len(upcoming),
            )

        return self._run("student dashboard", StudentDashboard, build)
