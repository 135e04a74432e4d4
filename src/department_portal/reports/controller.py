from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, current_user_id, login_required, result_response, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        role = current_role()
        if role == Role.ADMIN:
            return result_response(reports.admin_dashboard())
        if role == Role.FACULTY:
            return result_response(reports.faculty_dashboard(current_user_id()))
        return result_response(reports.student_dashboard(current_user_id()))

    @app.route("/student/attendance", endpoint="student_attendance")
    @roles_required(Role.STUDENT)
    def student_attendance():
        return result_response(reports.student_attendance(current_user_id()))

    @app.route("/student/performance", endpoint="student_performance")
    @roles_required(Role.STUDENT)
    def student_performance():
        return result_response(reports.student_performance(current_user_id()))

    @app.route("/student/marks", endpoint="student_marks")
    @roles_required(Role.STUDENT)
    def student_marks():
        return result_response(reports.student_mark_sheet(current_user_id()))

    @app.route("/faculty/attendance/summary", endpoint="class_attendance")
    @roles_required(Role.FACULTY, Role.ADMIN)
    def class_attendance():
        return result_response(
            reports.class_attendance(class_id=request.args.get("classId"), subject_id=request.args.get("subjectId"))
        )

    @app.route("/faculty/performance", endpoint="class_performance")
    @roles_required(Role.FACULTY, Role.ADMIN)
    def class_performance():
        return result_response(
            reports.class_performance(
                class_id=request.args.get("classId"),
                subject_id=request.args.get("subjectId"),
                assessment_name=request.args.get("assessment"),
            )
        )
