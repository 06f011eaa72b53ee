from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_range
from ..core.constants import MAX_OFFICE_RADIUS_METERS, MIN_OFFICE_RADIUS_METERS
from ..core.exceptions import InvalidInput


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class OfficeLocation:
    """Domain entity: the office point employees must check in around.

    Singleton per deployment; only changed through an administrative update.
    """

    latitude: float
    longitude: float
    address: str
    radius_meters: int

    def __post_init__(self) -> None:
        require_range(self.latitude, "latitude", -90.0, 90.0)
        require_range(self.longitude, "longitude", -180.0, 180.0)
        if isinstance(self.radius_meters, bool) or int(self.radius_meters) != self.radius_meters:
            raise InvalidInput("radius_meters must be a whole number of meters")
        require_range(self.radius_meters, "radius_meters", MIN_OFFICE_RADIUS_METERS, MAX_OFFICE_RADIUS_METERS)

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def to_setting_value(self) -> dict:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
            "radius": self.radius_meters,
        }

    @classmethod
    def from_setting_value(cls, value: dict) -> "OfficeLocation":
        return cls(
            latitude=float(value["latitude"]),
            longitude=float(value["longitude"]),
            address=str(value.get("address") or ""),
            radius_meters=int(value["radius"]),
        )
