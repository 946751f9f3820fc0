from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import DayOfWeek
from .model import ClassGroup, TimetableEntry


class TimetableRepository(Protocol):
    def list_for_group(self, group: ClassGroup) -> Sequence[TimetableEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: str) -> Optional[TimetableEntry]:
        raise NotImplementedError

    def create(self, *, group: ClassGroup, day_of_week: DayOfWeek, time_slot: str, subject: str) -> str:
        """Returns entry_id."""

        raise NotImplementedError

    def update(self, *, entry_id: str, day_of_week: DayOfWeek, time_slot: str, subject: str) -> bool:
        raise NotImplementedError

    def delete(self, *, entry_id: str) -> bool:
        raise NotImplementedError
