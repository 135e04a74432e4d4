from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List, Optional

from ..core.enums import Trend


@dataclass(frozen=True)
class SubjectAttendance:
    subject_id: int
    subject_name: str
    attended: int
    total: int
    percentage: float


@dataclass(frozen=True)
class StudentAttendance:
    """Attendance of one student in one subject of a class."""

    student_id: int
    name: str
    roll_no: Optional[str]
    attended: int
    total: int
    percentage: float


@dataclass(frozen=True)
class DistributionBand:
    range: str
    count: int


@dataclass(frozen=True)
class PerformanceFlag:
    name: str
    percentage: float
    reason: str
    trend: Trend

    def to_dict(self) -> dict:
        return {"name": self.name, "percentage": self.percentage, "reason": self.reason, "trend": self.trend.value}


@dataclass(frozen=True)
class ClassPerformance:
    distribution: List[DistributionBand] = field(default_factory=list)
    students_to_watch: List[PerformanceFlag] = field(default_factory=list)
    top_performers: List[PerformanceFlag] = field(default_factory=list)
    average_performers: List[PerformanceFlag] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "distribution": [asdict(b) for b in self.distribution],
            "students_to_watch": [f.to_dict() for f in self.students_to_watch],
            "top_performers": [f.to_dict() for f in self.top_performers],
            "average_performers": [f.to_dict() for f in self.average_performers],
        }


@dataclass(frozen=True)
class SubjectScore:
    subject_id: int
    subject_name: str
    percentage: float


@dataclass(frozen=True)
class PerformanceSummary:
    subjects: List[SubjectScore] = field(default_factory=list)
    average_percentage: float = 0.0
    best_subject: Optional[SubjectScore] = None
    needs_improvement: Optional[SubjectScore] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MarkSheetRow:
    subject_id: int
    subject_name: str
    assessment_name: str
    marks_obtained: float
    max_marks: float
    grade: str


@dataclass(frozen=True)
class AdminDashboard:
    student_count: int = 0
    faculty_count: int = 0
    upcoming_events: list = field(default_factory=list)


@dataclass(frozen=True)
class FacultyDashboard:
    classes_in_charge_count: int = 0
    subjects_handled_count: int = 0
    unread_feedback_count: int = 0
    classes_in_charge: list = field(default_factory=list)
    subjects_handled: list = field(default_factory=list)
    recent_feedback: list = field(default_factory=list)


@dataclass(frozen=True)
class StudentDashboard:
    attendance_percentage: float = 0.0
    recent_mark: str = "N/A"
    upcoming_events_count: int = 0
