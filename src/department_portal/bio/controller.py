from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, handle_errors, json_body, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/student/bio", endpoint="my_bio")
    @roles_required(Role.STUDENT)
    @handle_errors
    def my_bio():
        bio = container.bio_service.get_bio(current_user_id())
        return jsonify(bio.to_dict() if bio else None)

    @app.route("/student/bio", methods=["POST"], endpoint="save_bio")
    @roles_required(Role.STUDENT)
    @handle_errors
    def save_bio():
        container.bio_service.save_bio(student_id=current_user_id(), data=json_body())
        return ok("Bio-data saved successfully.")

    @app.route("/students/<int:student_id>/bio", endpoint="student_bio")
    @roles_required(Role.ADMIN, Role.FACULTY)
    @handle_errors
    def student_bio(student_id: int):
        bio = container.bio_service.get_bio(student_id)
        return jsonify(bio.to_dict() if bio else None)
