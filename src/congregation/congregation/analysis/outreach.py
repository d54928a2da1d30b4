from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import as_datetime
from ..core.constants import DEFAULT_ABSENT_SERVICE_WINDOW
from ..core.exceptions import NotFoundError, ValidationError
from ..members.model import Member
from ..members.repository import PeopleRepository, Person
from ..worship.model import Service
from ..worship.repository import ServiceRepository

log = logging.getLogger(__name__)


def most_recent_services(services: Iterable[Service], last_n: int) -> List[Service]:
    if last_n < 1:
        raise ValidationError("number of services must be at least 1")
    ordered = sorted(services, key=lambda s: s.service_datetime, reverse=True)
    return ordered[:last_n]


def select_absent_members(
    members: Sequence[Member],
    window: Sequence[Service],
    records: Iterable[AttendanceRecord],
) -> List[Member]:
    """Active members who attended none of the services in ``window``.

    An empty window means there is nothing to be absent from.
    """
    if not window:
        return []
    window_ids = {s.service_id for s in window}
    present = {r.person_id for r in records if r.service_id in window_ids}
    return [m for m in members if m.is_active and m.person_id not in present]


def select_first_time_attendees(
    service: Service,
    records: Iterable[AttendanceRecord],
    people: Iterable[Person],
) -> List[Person]:
    """Attendees of ``service`` whose first-visit marker is this service."""
    attended = {r.person_id for r in records if r.service_id == service.service_id}
    when = as_datetime(service.service_datetime)
    return [
        p
        for p in people
        if p.person_id in attended and p.first_visit is not None and as_datetime(p.first_visit) == when
    ]


class OutreachService:
    """Candidate lists for pastoral follow-up."""

    def __init__(
        self,
        people: PeopleRepository,
        services: ServiceRepository,
        attendance: AttendanceRepository,
    ):
        self._people = people
        self._services = services
        self._attendance = attendance

    async def absent_from_last_services(self, last_n: int = DEFAULT_ABSENT_SERVICE_WINDOW) -> List[Member]:
        if int(last_n) < 1:
            raise ValidationError("number of services must be at least 1")

        members, recent = await asyncio.gather(
            asyncio.to_thread(self._people.list_active_members),
            asyncio.to_thread(self._services.list_recent, int(last_n)),
        )
        window = most_recent_services(recent, int(last_n))
        if not window:
            return []

        records = await asyncio.to_thread(self._attendance.list_for_services, [s.service_id for s in window])
        absent = select_absent_members(members, window, records)
        log.info("absent from last %d service(s): %d member(s)", len(window), len(absent))
        return absent

    async def first_time_attendees(self, service_id: int) -> List[Person]:
        service = await asyncio.to_thread(self._services.get_by_id, int(service_id))
        if not service:
            raise NotFoundError(f"service {service_id} not found")

        records = await asyncio.to_thread(self._attendance.list_for_service, service.service_id)
        people = await asyncio.to_thread(self._people.get_many, [r.person_id for r in records])
        return select_first_time_attendees(service, records, people)
