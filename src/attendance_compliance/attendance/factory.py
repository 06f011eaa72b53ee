from __future__ import annotations

from dataclasses import dataclass

from ..face.gate import is_face_valid
from ..locations.geofence import is_within_radius
from ..locations.model import OfficeLocation
from .model import CheckAttempt
from .strategies.absent_strategy import AbsentStrategy
from .strategies.accepted_strategy import AcceptedStrategy
from .strategies.base import AttendanceStrategy
from .strategies.face_rejected_strategy import FaceRejectedStrategy
from .strategies.location_rejected_strategy import LocationRejectedStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: pick the strategy for an attempt.

    Checks run in fixed order and the first failure wins: face before
    location, so an unverified identity is never reported as a location
    problem.
    """

    face_threshold: float
    face_verification: bool = True

    def for_attempt(self, attempt: CheckAttempt, office: OfficeLocation) -> AttendanceStrategy:
        if self.face_verification and not is_face_valid(attempt.face_confidence, self.face_threshold):
            return FaceRejectedStrategy()
        if not is_within_radius(attempt.coordinates, office):
            return LocationRejectedStrategy()
        return AcceptedStrategy()

    def for_absence(self) -> AttendanceStrategy:
        return AbsentStrategy()
