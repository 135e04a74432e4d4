from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, fail, handle_errors, json_body, login_required, ok, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/classes", endpoint="list_classes")
    @login_required
    @handle_errors
    def list_classes():
        return jsonify(container.class_service.list_classes())

    @app.route("/classes/<int:class_id>", endpoint="get_class")
    @login_required
    @handle_errors
    def get_class(class_id: int):
        school_class = container.class_service.get_class(class_id)
        if not school_class:
            return fail("Class not found.", 404)
        return jsonify(school_class.to_dict())

    @app.route("/classes/<int:class_id>/students", endpoint="class_students")
    @roles_required(Role.ADMIN, Role.FACULTY)
    @handle_errors
    def class_students(class_id: int):
        return jsonify(container.class_service.list_students(class_id))

    @app.route("/admin/classes", methods=["POST"], endpoint="create_class")
    @admin_required
    @handle_errors
    def create_class():
        data = json_body()
        class_id = container.class_service.create_class(
            name=data.get("name", ""),
            academic_year=data.get("academicYear", ""),
            incharge_faculty_id=data.get("inchargeFacultyId"),
        )
        return ok("Class created successfully.", id=class_id), 201

    @app.route("/admin/classes/<int:class_id>", methods=["PUT"], endpoint="update_class")
    @admin_required
    @handle_errors
    def update_class(class_id: int):
        data = json_body()
        container.class_service.update_class(
            class_id=class_id,
            name=data.get("name", ""),
            academic_year=data.get("academicYear", ""),
            incharge_faculty_id=data.get("inchargeFacultyId"),
        )
        return ok("Class updated successfully.")

    @app.route("/admin/classes/<int:class_id>", methods=["DELETE"], endpoint="delete_class")
    @admin_required
    @handle_errors
    def delete_class(class_id: int):
        container.class_service.delete_class(class_id)
        return ok("Class deleted successfully.")
