from __future__ import annotations

from ...core.constants import NOT_AVAILABLE
from .base import GradeCalculator

# (minimum percentage, letter), checked top-down
GRADE_THRESHOLDS = (
    (91, "O"),
    (81, "A+"),
    (71, "A"),
    (61, "B+"),
    (51, "B"),
    (50, "C"),
)
FAIL_GRADE = "U"


class StandardGradeCalculator(GradeCalculator):
    """Standard rule: percentage against descending thresholds, N/A without a maximum."""

    def grade(self, marks_obtained: float, max_marks: float) -> str:
        if max_marks is None or max_marks <= 0:
            return NOT_AVAILABLE
        percentage = float(marks_obtained) / float(max_marks) * 100
        for minimum, letter in GRADE_THRESHOLDS:
            if percentage >= minimum:
                return letter
        return FAIL_GRADE


_standard = StandardGradeCalculator()


def calculate_grade(marks_obtained: float, max_marks: float) -> str:
    return _standard.grade(marks_obtained, max_marks)
