from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one person present at one service.

    The (service_id, person_id) pair is the whole identity; storage keeps it unique.
    """

    service_id: int
    person_id: int


@dataclass(frozen=True)
class MarkResult:
    """Outcome of (re)submitting the attendee set for a service."""

    service_id: int
    attendee_ids: tuple[int, ...]
    first_visit_ids: tuple[int, ...] = ()
    skipped_ids: tuple[int, ...] = ()
    first_visit_at: Optional[datetime] = None
