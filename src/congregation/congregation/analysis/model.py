from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..members.model import Member
from ..worship.model import Service


@dataclass(frozen=True)
class LapseClassification:
    tier: int
    elapsed_days: Optional[int]  # None = never attended (unbounded)


@dataclass(frozen=True)
class LapseResult:
    """Read-model for the lapsed-member report; recomputed on every request."""

    person: Member
    tier: int
    elapsed_days: Optional[int]
    last_attended: Optional[datetime]

    @property
    def never_attended(self) -> bool:
        return self.last_attended is None


@dataclass(frozen=True)
class Snapshot:
    """One consistent read of the store used for a single report."""

    members: Sequence[Member]
    services: Sequence[Service]
    records: Sequence[AttendanceRecord]
