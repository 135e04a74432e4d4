from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import EventType
from .model import Event


class EventRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        date: datetime,
        description: str,
        type: EventType,
        location: str,
        incharge_faculty_id: Optional[int],
        class_ids: Iterable[int],
    ) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Event]:
        """Every event, newest date first."""

        raise NotImplementedError

    def list_upcoming(self, since: datetime) -> Sequence[Event]:
        """Events dated at or after ``since``, soonest first."""

        raise NotImplementedError
