from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: the slice of a user the attendance engine needs.

    ``face_descriptor`` is the raw stored reference encoding (JSON text, CSV
    text, a list, or packed float32 bytes); it is parsed lazily and cached.
    """

    user_id: int
    company_id: int
    name: str
    role: Role = Role.EMPLOYEE
    face_descriptor: Any = None
    basic_salary: float = 0.0
    joining_date: Optional[date] = None
    is_active: bool = True
