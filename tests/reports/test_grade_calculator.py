from __future__ import annotations

import pytest

from department_portal.reports.grading.base import GradeCalculator
from department_portal.reports.grading.standard_grade_calculator import StandardGradeCalculator, calculate_grade

GRADE_ORDER = ["U", "C", "B", "B+", "A", "A+", "O"]


@pytest.mark.parametrize(
    "obtained, maximum, expected",
    [
        (91, 100, "O"),
        (100, 100, "O"),
        (81, 100, "A+"),
        (71, 100, "A"),
        (61, 100, "B+"),
        (51, 100, "B"),
        (50, 100, "C"),
        (49.9, 100, "U"),
        (0, 100, "U"),
        (45, 50, "A+"),
        (46, 50, "O"),
    ],
)
def test_thresholds(obtained, maximum, expected):
    assert calculate_grade(obtained, maximum) == expected


def test_between_fifty_and_fifty_one_is_c():
    assert calculate_grade(50.5, 100) == "C"
    assert calculate_grade(51, 100) == "B"


@pytest.mark.parametrize("maximum", [0, -10])
def test_no_maximum_is_not_available(maximum):
    assert calculate_grade(10, maximum) == "N/A"


def test_grade_never_drops_as_score_rises():
    grades = [calculate_grade(score / 2, 100) for score in range(0, 201)]

    assert set(grades) <= set(GRADE_ORDER)
    ranks = [GRADE_ORDER.index(g) for g in grades]
    assert ranks == sorted(ranks)


def test_standard_calculator_is_a_grade_calculator():
    assert isinstance(StandardGradeCalculator(), GradeCalculator)
