from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import handle_errors, json_body, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/faculty/marks", methods=["POST"], endpoint="save_marks")
    @roles_required(Role.FACULTY)
    @handle_errors
    def save_marks():
        data = json_body()
        written = container.marks_service.save_marks(
            subject_id=data.get("subjectId"),
            class_id=data.get("classId"),
            assessment_name=data.get("assessmentName", ""),
            entries=data.get("marks") or [],
        )
        return ok("Marks saved successfully.", count=written)

    @app.route("/faculty/marks", endpoint="assessment_marks")
    @roles_required(Role.FACULTY, Role.ADMIN)
    @handle_errors
    def assessment_marks():
        return jsonify(
            container.marks_service.get_marks_for_assessment(
                subject_id=request.args.get("subjectId"),
                assessment_name=request.args.get("assessment", ""),
            )
        )

    @app.route("/subjects/<int:subject_id>/assessments", endpoint="subject_assessments")
    @login_required
    @handle_errors
    def subject_assessments(subject_id: int):
        return jsonify(container.marks_service.list_assessments(subject_id))
