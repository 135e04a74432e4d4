from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EventType


@dataclass(frozen=True)
class Event:
    """Event or notice; an empty ``class_ids`` means it is visible to everyone."""

    event_id: int
    title: str
    date: datetime
    description: str
    type: EventType
    location: str
    incharge_faculty_id: Optional[int] = None
    class_ids: tuple[int, ...] = ()

    @property
    def is_global(self) -> bool:
        return not self.class_ids

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "date": self.date.isoformat(),
            "description": self.description,
            "type": self.type.value,
            "location": self.location,
            "incharge_faculty_id": self.incharge_faculty_id,
            "class_ids": list(self.class_ids),
        }
