from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Sequence

from .model import Employee


class EmployeeDirectory(Protocol):
    """Profiles as seen by the attendance engine.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def list_active_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_many(self, user_ids: Iterable[str]) -> Mapping[str, Employee]:
        raise NotImplementedError
