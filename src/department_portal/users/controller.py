from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    fail,
    handle_errors,
    json_body,
    login_required,
    ok,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .service import NewUser


def _role_arg(value: str) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role.")


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @handle_errors
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(
            data.get("email", ""), data.get("password", ""), _role_arg(data.get("role", ""))
        )

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["class_id"] = s_user.class_id

        return ok("Login successful.", user={"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok("Logged out.")

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        user = container.users_repo.get_by_id(current_user_id())
        if not user:
            session.clear()
            return fail("Please log in to continue.", 401)
        return jsonify(user.public_dict())

    @app.route("/profile", methods=["POST"], endpoint="update_profile")
    @login_required
    @handle_errors
    def update_profile():
        name = json_body().get("name", "")
        container.user_service.update_profile(user_id=current_user_id(), name=name)
        session["name"] = name.strip()
        return ok("Profile updated successfully.")

    @app.route("/profile/password", methods=["POST"], endpoint="change_password")
    @login_required
    @handle_errors
    def change_password():
        data = json_body()
        container.user_service.change_password(
            user_id=current_user_id(),
            current_password=data.get("currentPassword", ""),
            new_password=data.get("newPassword", ""),
        )
        return ok("Password changed successfully.")

    @app.route("/admin/users", endpoint="admin_users")
    @admin_required
    @handle_errors
    def admin_users():
        role = _role_arg(request.args.get("role", Role.STUDENT.value))
        return jsonify(container.user_service.list_users(role))

    @app.route("/admin/users", methods=["POST"], endpoint="add_user")
    @admin_required
    @handle_errors
    def add_user():
        data = json_body()
        user_id = container.user_service.add_user(
            current_role=current_role(),
            data=NewUser(
                name=data.get("name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                role=_role_arg(data.get("role", "")),
                class_id=data.get("classId") or None,
                roll_no=data.get("rollNo"),
                incharge_of_classes=tuple(data.get("inchargeOfClasses") or ()),
                handling_subjects=tuple(data.get("handlingSubjects") or ()),
            ),
        )
        return ok("User added successfully.", id=user_id), 201

    @app.route("/admin/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    @handle_errors
    def update_user(user_id: int):
        data = json_body()
        container.user_service.update_user(
            current_role=current_role(),
            user_id=user_id,
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password") or None,
            class_id=data.get("classId") or None,
            incharge_of_classes=data.get("inchargeOfClasses") or (),
            handling_subjects=data.get("handlingSubjects") or (),
        )
        return ok("User updated successfully.")

    @app.route("/admin/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    @handle_errors
    def delete_user(user_id: int):
        container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        return ok("User deleted successfully.")
