from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, handle_errors, json_body, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/student/feedback", methods=["POST"], endpoint="submit_feedback")
    @roles_required(Role.STUDENT)
    @handle_errors
    def submit_feedback():
        data = json_body()
        container.feedback_service.submit(
            student_id=None if data.get("anonymous") else current_user_id(),
            faculty_id=data.get("facultyId"),
            subject_id=data.get("subjectId"),
            feedback_text=data.get("feedbackText", ""),
        )
        return ok("Feedback submitted successfully."), 201

    @app.route("/faculty/feedback", endpoint="my_feedback")
    @roles_required(Role.FACULTY)
    @handle_errors
    def my_feedback():
        return jsonify([f.to_dict() for f in container.feedback_service.recent_unread(current_user_id())])

    @app.route("/faculty/feedback/<int:feedback_id>/read", methods=["POST"], endpoint="read_feedback")
    @roles_required(Role.FACULTY)
    @handle_errors
    def read_feedback(feedback_id: int):
        container.feedback_service.mark_read(faculty_id=current_user_id(), feedback_id=feedback_id)
        return ok("Feedback marked as read.")
