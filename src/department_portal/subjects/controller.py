from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_user_id,
    handle_errors,
    json_body,
    login_required,
    ok,
    roles_required,
)
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/subjects", endpoint="list_subjects")
    @login_required
    @handle_errors
    def list_subjects():
        return jsonify(container.subject_service.list_subjects())

    @app.route("/classes/<int:class_id>/subjects", endpoint="class_subjects")
    @login_required
    @handle_errors
    def class_subjects(class_id: int):
        return jsonify(container.subject_service.list_by_class(class_id))

    @app.route("/faculty/subjects", endpoint="my_subjects")
    @roles_required(Role.FACULTY)
    @handle_errors
    def my_subjects():
        return jsonify(container.subject_service.list_by_faculty(current_user_id()))

    @app.route("/admin/faculty/<int:faculty_id>/subjects", endpoint="faculty_subjects")
    @admin_required
    @handle_errors
    def faculty_subjects(faculty_id: int):
        return jsonify(container.subject_service.list_by_faculty(faculty_id))

    @app.route("/admin/subjects", methods=["POST"], endpoint="create_subject")
    @admin_required
    @handle_errors
    def create_subject():
        data = json_body()
        subject_id = container.subject_service.create_subject(
            name=data.get("name", ""),
            code=data.get("code", ""),
            class_id=data.get("classId"),
            faculty_id=data.get("facultyId"),
        )
        return ok("Subject created successfully.", id=subject_id), 201

    @app.route("/admin/subjects/<int:subject_id>", methods=["PUT"], endpoint="update_subject")
    @admin_required
    @handle_errors
    def update_subject(subject_id: int):
        data = json_body()
        container.subject_service.update_subject(
            subject_id=subject_id,
            name=data.get("name", ""),
            code=data.get("code", ""),
            class_id=data.get("classId"),
            faculty_id=data.get("facultyId"),
        )
        return ok("Subject updated successfully.")

    @app.route("/admin/subjects/<int:subject_id>", methods=["DELETE"], endpoint="delete_subject")
    @admin_required
    @handle_errors
    def delete_subject(subject_id: int):
        container.subject_service.delete_subject(subject_id)
        return ok("Subject deleted successfully.")
