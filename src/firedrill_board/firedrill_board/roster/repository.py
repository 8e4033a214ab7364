from __future__ import annotations

from typing import Protocol, Sequence

from .model import StaffMember, Student


class RosterRepository(Protocol):
    """Read-only roster source.

    Both lists come back ordered by last name; the board does not re-sort.
    """

    def list_drill_staff(self) -> Sequence[StaffMember]:
        """Active staff not flagged exclude_fire_drill."""

        raise NotImplementedError

    def list_students(self) -> Sequence[Student]:
        raise NotImplementedError
