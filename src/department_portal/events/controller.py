from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    current_class_id,
    current_role,
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
    @app.route("/events", endpoint="list_events")
    @login_required
    @handle_errors
    def list_events():
        events = container.event_service.list_for_user(
            role=current_role(), user_id=current_user_id(), class_id=current_class_id()
        )
        return jsonify([e.to_dict() for e in events])

    @app.route("/events/upcoming", endpoint="upcoming_events")
    @login_required
    @handle_errors
    def upcoming_events():
        events = container.event_service.upcoming(
            role=current_role(), user_id=current_user_id(), class_id=current_class_id()
        )
        return jsonify([e.to_dict() for e in events])

    @app.route("/events", methods=["POST"], endpoint="add_event")
    @roles_required(Role.ADMIN, Role.FACULTY)
    @handle_errors
    def add_event():
        data = json_body()
        event_id = container.event_service.add_event(
            title=data.get("title", ""),
            date=data.get("date"),
            description=data.get("description", ""),
            type=data.get("type"),
            location=data.get("location", ""),
            class_ids=data.get("classIds") or (),
            incharge_faculty_id=data.get("inchargeFacultyId"),
        )
        return ok("Event added successfully.", id=event_id), 201
