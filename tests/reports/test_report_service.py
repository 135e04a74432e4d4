from __future__ import annotations

from datetime import date, datetime, timedelta

from department_portal.attendance.model import AttendanceEntry
from department_portal.core.enums import Role, Trend

from fakes import FailingAttendance, build_fake_container


def _mark_attendance(container, school, subject_id, day, present: dict):
    container.attendance_repo.upsert_batch(
        subject_id=subject_id,
        class_id=school.class_id,
        on_date=day,
        period="1",
        entries=[AttendanceEntry(student_id=sid, is_present=p) for sid, p in present.items()],
    )


def test_student_attendance_per_subject(container, school):
    a, b = school.alice.user_id, school.bob.user_id
    _mark_attendance(container, school, school.maths_id, date(2026, 1, 5), {a: True, b: False})
    _mark_attendance(container, school, school.maths_id, date(2026, 1, 6), {a: False, b: False})
    _mark_attendance(container, school, school.physics_id, date(2026, 1, 5), {a: True})

    result = container.report_service.student_attendance(a)

    assert result.ok
    rows = result.value
    assert [r.subject_name for r in rows] == ["Mathematics", "Physics"]
    assert (rows[0].attended, rows[0].total, rows[0].percentage) == (1, 2, 50.0)
    assert (rows[1].attended, rows[1].total, rows[1].percentage) == (1, 1, 100.0)


def test_attendance_without_records_is_zero(container, school):
    assert container.report_service.student_attendance(school.alice.user_id).value == []
    assert container.report_service.overall_attendance_percentage(school.alice.user_id).value == 0

    rows = container.report_service.class_attendance(class_id=school.class_id, subject_id=school.maths_id).value
    assert [(r.name, r.total, r.percentage) for r in rows] == [("alice", 0, 0), ("bob", 0, 0)]


def test_attendance_percentage_rounds_to_two_places(container, school):
    a = school.alice.user_id
    for day, present in ((5, True), (6, False), (7, False)):
        _mark_attendance(container, school, school.maths_id, date(2026, 1, day), {a: present})

    assert container.report_service.overall_attendance_percentage(a).value == 33.33


def test_class_performance_distribution_and_flags(container, school):
    marks = container.marks_repo
    a, b = school.alice.user_id, school.bob.user_id
    marks.add(a, school.maths_id, school.class_id, "Unit Test 1", 42, 100)
    marks.add(b, school.maths_id, school.class_id, "Unit Test 1", 95, 100)
    marks.add(a, school.maths_id, school.class_id, "Unit Test 2", 70, 100)
    marks.add(b, school.maths_id, school.class_id, "Unit Test 2", 10, 0)

    result = container.report_service.class_performance(class_id=school.class_id, subject_id=school.maths_id)

    perf = result.value
    counts = {band.range: band.count for band in perf.distribution}
    assert counts["40-49"] == 1
    assert counts["70-79"] == 1
    assert counts["90-100"] == 1
    # the record without a maximum is skipped
    assert sum(counts.values()) == 3

    assert [f.reason for f in perf.students_to_watch] == ["Scored 42.0% in 'Unit Test 1'"]
    assert perf.students_to_watch[0].trend == Trend.DOWN
    assert [(f.name, f.trend) for f in perf.top_performers] == [("bob", Trend.UP)]
    assert [(f.name, f.trend) for f in perf.average_performers] == [("alice", Trend.STABLE)]


def test_class_performance_single_assessment_reason(container, school):
    container.marks_repo.add(school.alice.user_id, school.maths_id, school.class_id, "Unit Test 1", 21, 50)
    container.marks_repo.add(school.alice.user_id, school.maths_id, school.class_id, "Unit Test 2", 50, 50)

    perf = container.report_service.class_performance(
        class_id=school.class_id, subject_id=school.maths_id, assessment_name="Unit Test 1"
    ).value

    assert [f.reason for f in perf.students_to_watch] == ["Scored 42.0%"]
    assert perf.top_performers == []


def test_class_performance_lists_are_sorted_and_capped(container, school):
    users = container.users_repo
    for i in range(12):
        student = users.add(f"student{i:02d}", Role.STUDENT, class_id=school.class_id)
        container.marks_repo.add(student.user_id, school.maths_id, school.class_id, "Quiz", i, 100)

    perf = container.report_service.class_performance(
        class_id=school.class_id, subject_id=school.maths_id, assessment_name="all"
    ).value

    watch = [f.percentage for f in perf.students_to_watch]
    assert len(watch) == 10
    assert watch == sorted(watch)
    assert watch[0] == 0


def test_class_performance_empty_without_marks(container, school):
    perf = container.report_service.class_performance(class_id=school.class_id, subject_id=school.maths_id).value

    assert perf.distribution == []
    assert perf.students_to_watch == perf.top_performers == perf.average_performers == []


def test_student_performance_summary(container, school):
    a = school.alice.user_id
    container.marks_repo.add(a, school.maths_id, school.class_id, "Unit Test 1", 40, 50)
    container.marks_repo.add(a, school.maths_id, school.class_id, "Unit Test 2", 50, 50)
    container.marks_repo.add(a, school.physics_id, school.class_id, "Unit Test 1", 30, 60)

    summary = container.report_service.student_performance(a).value

    by_name = {s.subject_name: s.percentage for s in summary.subjects}
    assert by_name == {"Mathematics": 90.0, "Physics": 50.0}
    assert summary.average_percentage == 70.0
    assert summary.best_subject.subject_name == "Mathematics"
    assert summary.needs_improvement.subject_name == "Physics"


def test_average_uses_unrounded_subject_percentages(container, school):
    a = school.alice.user_id
    chemistry = container.subjects_repo.create(
        name="Chemistry", code="CH101", class_id=school.class_id, faculty_id=school.faculty.user_id
    )
    container.marks_repo.add(a, school.maths_id, school.class_id, "Unit Test 1", 2, 3)
    container.marks_repo.add(a, school.physics_id, school.class_id, "Unit Test 1", 2, 3)
    container.marks_repo.add(a, chemistry, school.class_id, "Unit Test 1", 60, 100)

    summary = container.report_service.student_performance(a).value

    assert sorted(s.percentage for s in summary.subjects) == [60.0, 66.67, 66.67]
    # 64.45 if the rounded percentages were averaged
    assert summary.average_percentage == 64.44


def test_single_subject_has_no_needs_improvement(container, school):
    container.marks_repo.add(school.alice.user_id, school.maths_id, school.class_id, "Unit Test 1", 30, 40)

    summary = container.report_service.student_performance(school.alice.user_id).value

    assert summary.best_subject.percentage == 75.0
    assert summary.needs_improvement is None


def test_subject_with_zero_maximum_scores_zero(container, school):
    container.marks_repo.add(school.alice.user_id, school.maths_id, school.class_id, "Viva", 5, 0)

    summary = container.report_service.student_performance(school.alice.user_id).value

    assert summary.subjects[0].percentage == 0


def test_mark_sheet_carries_grades_newest_first(container, school):
    a = school.alice.user_id
    container.marks_repo.add(a, school.maths_id, school.class_id, "Unit Test 1", 46, 50)
    container.marks_repo.add(a, school.physics_id, school.class_id, "Unit Test 1", 20, 50)

    rows = container.report_service.student_mark_sheet(a).value

    assert [(r.subject_name, r.grade) for r in rows] == [("Physics", "U"), ("Mathematics", "O")]


def test_student_dashboard(container, school):
    a = school.alice.user_id
    _mark_attendance(container, school, school.maths_id, date(2026, 1, 5), {a: True})
    _mark_attendance(container, school, school.maths_id, date(2026, 1, 6), {a: False})
    container.marks_repo.add(a, school.maths_id, school.class_id, "Unit Test 1", 18, 25)
    container.marks_repo.add(a, school.maths_id, school.class_id, "Unit Test 2", 17.5, 20)

    soon = datetime.now() + timedelta(days=3)
    container.events_repo.add("Orientation", soon)
    container.events_repo.add("Lab visit", soon, class_ids=[school.class_id])
    container.events_repo.add("Other class", soon, class_ids=[999])
    container.events_repo.add("Past", datetime.now() - timedelta(days=3))

    dash = container.report_service.student_dashboard(a).value

    assert dash.attendance_percentage == 50.0
    assert dash.recent_mark == "17.5 / 20"
    assert dash.upcoming_events_count == 2


def test_faculty_dashboard(container, school):
    fid = school.faculty.user_id
    for i in range(3):
        container.feedback_repo.create(student_id=None, faculty_id=fid, subject_id=school.maths_id, feedback_text=f"note {i}")
    container.feedback_repo.mark_read(feedback_id=1, faculty_id=fid)

    dash = container.report_service.faculty_dashboard(fid).value

    assert dash.classes_in_charge_count == 1
    assert dash.subjects_handled_count == 1
    assert dash.unread_feedback_count == 2
    assert [f["feedback_text"] for f in dash.recent_feedback] == ["note 2", "note 1"]


def test_admin_dashboard(container, school):
    container.events_repo.add("Hackathon", datetime.now() + timedelta(days=1))

    dash = container.report_service.admin_dashboard().value

    assert (dash.student_count, dash.faculty_count) == (2, 2)
    assert [e["title"] for e in dash.upcoming_events] == ["Hackathon"]


def test_storage_failure_returns_zeroed_result():
    container = build_fake_container(attendance_repo=FailingAttendance())

    result = container.report_service.student_attendance(1)
    assert not result.ok
    assert result.value == []
    assert "database unavailable" in result.error

    assert container.report_service.overall_attendance_percentage(1).value == 0


def test_invalid_identifier_returns_zeroed_result(container):
    result = container.report_service.student_performance("not-an-id")

    assert not result.ok
    assert result.value.subjects == []
    assert result.value.average_percentage == 0

    dash = container.report_service.student_dashboard(12345)
    assert not dash.ok
    assert dash.value.recent_mark == "N/A"


def test_full_marks_in_one_subject(container, school):
    container.marks_repo.add(school.bob.user_id, school.physics_id, school.class_id, "Lab", 25, 25)

    summary = container.report_service.student_performance(school.bob.user_id).value

    assert summary.best_subject.subject_name == "Physics"
    assert summary.best_subject.percentage == 100.0
    assert summary.needs_improvement is None
