from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.datetime_utils import now_local
from ..common.validators import collect, parse_id, require_choice, require_min_length
from ..core.enums import EventType, Role
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)


def _parse_event_date(value) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError("Invalid date format.")


class EventService:
    def __init__(self, events: EventRepository, classes: ClassRepository, users: UserRepository):
        self._events = events
        self._classes = classes
        self._users = users

    def add_event(
        self,
        *,
        title: str,
        date,
        description: str,
        type,
        location: str,
        class_ids: Iterable = (),
        incharge_faculty_id=None,
    ) -> int:
        collect(
            [
                lambda: require_min_length(title, "Title", 3),
                lambda: require_min_length(description, "Description", 10),
                lambda: _parse_event_date(date),
                lambda: require_choice(type, EventType, "Invalid event type."),
                lambda: require_min_length(location, "Location", 3),
            ]
        )

        targets = sorted({parse_id(c, "class ID") for c in class_ids or ()})
        if targets and len(self._classes.get_many(targets)) != len(targets):
            raise ValidationError("One or more selected classes do not exist.")

        faculty_id = None
        if incharge_faculty_id not in (None, ""):
            faculty_id = parse_id(incharge_faculty_id, "in-charge faculty")
            faculty = self._users.get_by_id(faculty_id)
            if not faculty or faculty.role != Role.FACULTY:
                raise ValidationError("Selected in-charge faculty does not exist.")

        event_id = self._events.create(
            title=title.strip(),
            date=_parse_event_date(date),
            description=description.strip(),
            type=EventType(type),
            location=location.strip(),
            incharge_faculty_id=faculty_id,
            class_ids=targets,
        )
        logger.info("Created event %s for %s", event_id, targets or "everyone")
        return event_id

    def _visible_to(self, *, role: Role, user_id: int, class_id: Optional[int]):
        if role == Role.ADMIN:
            return lambda e: True
        if role == Role.FACULTY:
            own_classes = {c.class_id for c in self._classes.list_by_incharge(user_id)}
            return lambda e: (
                e.is_global or e.incharge_faculty_id == user_id or bool(own_classes.intersection(e.class_ids))
            )
        return lambda e: e.is_global or (class_id is not None and class_id in e.class_ids)

    def list_for_user(self, *, role: Role, user_id: int, class_id: Optional[int] = None) -> Sequence[Event]:
        visible = self._visible_to(role=role, user_id=user_id, class_id=class_id)
        return [e for e in self._events.list_all() if visible(e)]

    def upcoming(self, *, role: Role = Role.ADMIN, user_id: int = 0, class_id: Optional[int] = None) -> Sequence[Event]:
        visible = self._visible_to(role=role, user_id=user_id, class_id=class_id)
        return [e for e in self._events.list_upcoming(now_local()) if visible(e)]
