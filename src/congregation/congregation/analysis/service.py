from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..members.model import Member
from ..members.repository import PeopleRepository
from ..worship.repository import ServiceRepository
from .classifier import classify_lapse
from .model import LapseResult, Snapshot
from .repository import SnapshotRepository
from .resolver import resolve_last_attendance
from .thresholds import ThresholdSet

log = logging.getLogger(__name__)


def _sort_key(result: LapseResult):
    # Never attended sorts as the longest absence.
    return (result.tier, result.elapsed_days is None, result.elapsed_days or 0)


def assemble_lapse_report(
    members: Sequence[Member],
    last_attended: Dict[int, datetime],
    *,
    now: datetime,
    thresholds: ThresholdSet,
) -> List[LapseResult]:
    """Classify active members and rank the lapsed ones.

    Order: tier descending, then elapsed days descending; ties keep the order
    of ``members``.
    """
    results: List[LapseResult] = []
    for member in members:
        if not member.is_active:
            continue
        seen = last_attended.get(member.person_id)
        c = classify_lapse(seen, now, thresholds)
        if c.tier < 1:
            continue
        results.append(LapseResult(person=member, tier=c.tier, elapsed_days=c.elapsed_days, last_attended=seen))

    # sort(reverse=True) keeps equal keys in their original order.
    results.sort(key=_sort_key, reverse=True)
    return results


class LapseReportService:
    """Read-only lapsed-member report over a fresh snapshot of the store."""

    def __init__(
        self,
        people: PeopleRepository,
        services: ServiceRepository,
        attendance: AttendanceRepository,
        *,
        thresholds: ThresholdSet,
        snapshots: Optional[SnapshotRepository] = None,
    ):
        self._people = people
        self._services = services
        self._attendance = attendance
        self._thresholds = thresholds
        self._snapshots = snapshots

    @property
    def thresholds(self) -> ThresholdSet:
        return self._thresholds

    async def load_snapshot(self) -> Snapshot:
        """One read of members, services and attendance.

        With a snapshot repository the three reads share one transaction;
        without one each repository reads on its own connection.
        """
        if self._snapshots is not None:
            return await asyncio.to_thread(self._snapshots.load)

        members, services, records = await asyncio.gather(
            asyncio.to_thread(self._people.list_active_members),
            asyncio.to_thread(self._services.list_all),
            asyncio.to_thread(self._attendance.list_all),
        )
        return Snapshot(members=list(members), services=list(services), records=list(records))

    async def get_lapsed_members(
        self,
        *,
        now: Optional[datetime] = None,
        thresholds: Optional[ThresholdSet] = None,
    ) -> List[LapseResult]:
        now = now or now_local()
        thresholds = thresholds or self._thresholds

        snapshot = await self.load_snapshot()
        last_attended = resolve_last_attendance(snapshot.records, snapshot.services)
        report = assemble_lapse_report(snapshot.members, last_attended, now=now, thresholds=thresholds)

        log.info("lapse report: %d of %d active member(s) lapsed", len(report), len(snapshot.members))
        return report


def lapse_result_to_dict(result: LapseResult) -> dict:
    return {
        "person_id": result.person.person_id,
        "name": result.person.display_name,
        "phone_number": result.person.phone_number,
        "tier": result.tier,
        "elapsed_days": result.elapsed_days,
        "never_attended": result.never_attended,
        "last_attended": result.last_attended.isoformat() if result.last_attended else None,
    }
