from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Read model of a profile from the identity provider.

    Note: plain data only, no DB access here.
    """

    user_id: str
    name: str
    role: Role
    employee_number: Optional[str] = None
    department: Optional[str] = None
    is_active: bool = True
