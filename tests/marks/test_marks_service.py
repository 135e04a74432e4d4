from __future__ import annotations

import pytest

from department_portal.core.exceptions import ValidationError


def _save(container, school, assessment, entries):
    return container.marks_service.save_marks(
        subject_id=school.maths_id, class_id=school.class_id, assessment_name=assessment, entries=entries
    )


def test_save_and_read_back(container, school):
    written = _save(
        container,
        school,
        "Unit Test 1",
        [
            {"studentId": school.alice.user_id, "marksObtained": "42", "maxMarks": 50},
            {"studentId": school.bob.user_id, "marksObtained": None, "maxMarks": 50},
        ],
    )

    assert written == 1
    rows = container.marks_service.get_marks_for_assessment(subject_id=school.maths_id, assessment_name="Unit Test 1")
    assert [(r["student_id"], r["marks_obtained"], r["max_marks"]) for r in rows] == [(school.alice.user_id, 42.0, 50.0)]


def test_reentry_overwrites(container, school):
    _save(container, school, "Unit Test 1", [{"studentId": school.alice.user_id, "marksObtained": 10, "maxMarks": 50}])
    _save(container, school, "Unit Test 1", [{"studentId": school.alice.user_id, "marksObtained": 45, "maxMarks": 50}])

    records = container.marks_repo.list_for_student(school.alice.user_id)
    assert len(records) == 1
    assert records[0].marks_obtained == 45


def test_assessments_are_distinct_and_sorted(container, school):
    for name in ("Unit Test 2", "Unit Test 1", "Unit Test 2"):
        _save(container, school, name, [{"studentId": school.alice.user_id, "marksObtained": 1, "maxMarks": 2}])

    assert container.marks_service.list_assessments(school.maths_id) == ["Unit Test 1", "Unit Test 2"]


def test_assessment_name_is_required(container, school):
    with pytest.raises(ValidationError, match="Assessment name is required."):
        _save(container, school, "  ", [])


@pytest.mark.parametrize("subject_id, class_id", [("abc", 1), (1, 0), (999, 1)])
def test_invalid_subject_or_class(container, school, subject_id, class_id):
    with pytest.raises(ValidationError, match="Invalid subject or class ID."):
        container.marks_service.save_marks(
            subject_id=subject_id, class_id=class_id, assessment_name="Quiz", entries=[]
        )


def test_negative_marks_are_rejected(container, school):
    with pytest.raises(ValidationError):
        _save(container, school, "Quiz", [{"studentId": school.alice.user_id, "marksObtained": -1, "maxMarks": 10}])
