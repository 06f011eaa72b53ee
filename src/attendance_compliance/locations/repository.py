from __future__ import annotations

from typing import Optional, Protocol

from .model import OfficeLocation


class OfficeLocationRepository(Protocol):
    def get_office_location(self) -> Optional[OfficeLocation]:
        raise NotImplementedError

    def upsert_office_location(self, location: OfficeLocation) -> None:
        raise NotImplementedError
