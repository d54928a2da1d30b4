from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PersonKind, VisitorStatus


@dataclass(frozen=True)
class Member:
    """Domain entity: an enrolled member.

    Members are never physically removed; deactivation flips ``is_active``.
    ``first_visit`` is stamped once, by attendance marking.
    """

    person_id: int
    first_name: str
    last_name: str
    phone_number: Optional[str]
    email: Optional[str] = None
    member_since: Optional[datetime] = None
    first_visit: Optional[datetime] = None
    is_active: bool = True

    kind = PersonKind.MEMBER

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Visitor:
    """Domain entity: a visitor (no active flag, never lapse-classified)."""

    person_id: int
    first_name: str
    last_name: str
    phone_number: Optional[str]
    email: Optional[str] = None
    first_visit: Optional[datetime] = None
    status: VisitorStatus = VisitorStatus.NEW

    kind = PersonKind.VISITOR

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
