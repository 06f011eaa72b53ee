from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.exceptions import ConfigurationMissing
from .model import OfficeLocation
from .repository import OfficeLocationRepository

logger = logging.getLogger(__name__)


class LocationService:
    def __init__(self, locations: OfficeLocationRepository):
        self._locations = locations

    def get_office_location(self) -> OfficeLocation:
        location = self._locations.get_office_location()
        if location is None:
            raise ConfigurationMissing("office location is not configured")
        return location

    def update_office_location(
        self,
        *,
        latitude: float,
        longitude: float,
        address: str,
        radius_meters: int,
    ) -> OfficeLocation:
        location = OfficeLocation(
            latitude=float(latitude),
            longitude=float(longitude),
            address=require_non_empty(address, "address"),
            radius_meters=int(radius_meters),
        )
        self._locations.upsert_office_location(location)
        logger.info(
            "[location] office moved to (%.6f, %.6f) radius=%sm",
            location.latitude,
            location.longitude,
            location.radius_meters,
        )
        return location
