from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Schedule, Timetable


class TimetableRepository(Protocol):
    def get_for_class(self, class_id: int) -> Optional[Timetable]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Timetable]:
        raise NotImplementedError

    def save(self, *, class_id: int, schedule: Schedule) -> None:
        """Create or replace the full weekly schedule of a class."""

        raise NotImplementedError

    def delete_for_class(self, class_id: int) -> bool:
        raise NotImplementedError
