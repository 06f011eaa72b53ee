from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..attendance.model import AttendanceRecord


class DomainError(Exception):
    """Base exception for business rule violations."""


class InvalidInput(DomainError):
    """Raised when input data is missing or violates domain rules."""


class OutsideWorkingWindow(InvalidInput):
    """Raised when a check is submitted outside the shift's check window."""


class ConfigurationMissing(DomainError):
    """Raised when office location or shift policy is not configured."""


class InconsistentSession(DomainError):
    """Raised when a keluar timestamp precedes its matching masuk."""


class DuplicateSubmission(DomainError):
    """Raised by a repository when an authoritative record already exists.

    Carries the existing record so callers can return it instead of failing.
    """

    def __init__(self, existing: "AttendanceRecord"):
        super().__init__(
            f"authoritative {existing.type.value} already recorded for user {existing.user_id} on {existing.work_date}"
        )
        self.existing = existing


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
