from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol

from .model import ShiftPolicy


class ShiftResolver(Protocol):
    """Which policy applies to a user on a date.

    Injected into the attendance service so per-user or per-department
    policies can replace the global one without touching classification.
    """

    def resolve_shift(self, user_id: str, on_date: date) -> Optional[ShiftPolicy]:
        raise NotImplementedError


@dataclass(frozen=True)
class GlobalShiftResolver:
    """One policy for everyone (None when the deployment has not set one)."""

    policy: Optional[ShiftPolicy]

    def resolve_shift(self, user_id: str, on_date: date) -> Optional[ShiftPolicy]:
        return self.policy
