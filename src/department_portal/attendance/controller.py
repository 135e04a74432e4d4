from __future__ import annotations

from flask import Flask

from ..common.web import handle_errors, json_body, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/faculty/attendance", methods=["POST"], endpoint="save_attendance")
    @roles_required(Role.FACULTY)
    @handle_errors
    def save_attendance():
        data = json_body()
        written = container.attendance_service.save_batch(
            subject_id=data.get("subjectId"),
            class_id=data.get("classId"),
            on_date=data.get("date"),
            period=data.get("period"),
            records=data.get("records") or [],
        )
        return ok("Attendance recorded successfully.", count=written)
