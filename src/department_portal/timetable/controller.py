from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_user_id, handle_errors, json_body, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role
from .service import week_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/classes/<int:class_id>/timetable", endpoint="class_timetable")
    @login_required
    @handle_errors
    def class_timetable(class_id: int):
        return jsonify(container.timetable_service.get_timetable(class_id))

    @app.route("/admin/classes/<int:class_id>/timetable", methods=["PUT"], endpoint="save_timetable")
    @admin_required
    @handle_errors
    def save_timetable(class_id: int):
        container.timetable_service.save_timetable(class_id=class_id, schedule=json_body().get("schedule"))
        return ok("Timetable saved successfully.")

    @app.route("/student/timetable", endpoint="student_timetable")
    @roles_required(Role.STUDENT)
    @handle_errors
    def student_timetable():
        return jsonify(week_to_dict(container.timetable_service.student_view(current_user_id())))

    @app.route("/faculty/timetable", endpoint="faculty_timetable")
    @roles_required(Role.FACULTY)
    @handle_errors
    def faculty_timetable():
        return jsonify(week_to_dict(container.timetable_service.faculty_view(current_user_id())))
