from __future__ import annotations

import logging
from typing import Iterable, Union

from ..core.exceptions import NotFoundError, ValidationError
from ..members.repository import PeopleRepository
from ..worship.repository import ServiceRepository
from .model import MarkResult
from .repository import AttendanceRepository

log = logging.getLogger(__name__)

Attendees = Union[None, int, str, Iterable[Union[int, str]]]


def normalize_attendees(attendees: Attendees) -> list[int]:
    """Turn a submitted attendee value into a de-duplicated list of ids.

    Forms post a single checkbox as a scalar and several as a list; both mean
    the same thing here. Order of first appearance is kept.
    """
    if attendees is None:
        return []
    if isinstance(attendees, (int, str)):
        attendees = [attendees]

    out: list[int] = []
    seen: set[int] = set()
    for raw in attendees:
        if isinstance(raw, str) and not raw.strip():
            continue
        try:
            person_id = int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f"invalid attendee id: {raw!r}") from None
        if person_id not in seen:
            seen.add(person_id)
            out.append(person_id)
    return out


class AttendanceService:
    """Use case: mark (or re-submit) who attended a service."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        people: PeopleRepository,
        services: ServiceRepository,
    ):
        self._attendance = attendance
        self._people = people
        self._services = services

    def mark_attendance(self, service_id: int, attendees: Attendees) -> MarkResult:
        service = self._services.get_by_id(int(service_id))
        if not service:
            raise NotFoundError(f"service {service_id} not found")

        requested = normalize_attendees(attendees)
        known = {p.person_id: p for p in self._people.get_many(requested)}
        skipped = tuple(pid for pid in requested if pid not in known)
        if skipped:
            log.warning("service %s: skipping unknown attendee ids %s", service.service_id, list(skipped))
        attendee_ids = tuple(pid for pid in requested if pid in known)

        # Decided before the rewrite; "elsewhere" excludes this service either way.
        first_timers = tuple(
            pid
            for pid in attendee_ids
            if known[pid].first_visit is None
            and not self._attendance.has_attendance_elsewhere(pid, exclude_service_id=service.service_id)
        )

        self._attendance.replace_for_service(service.service_id, attendee_ids)
        for pid in first_timers:
            self._people.set_first_visit(pid, first_visit=service.service_datetime)

        log.info(
            "service %s: marked %d attendee(s), %d first visit(s)",
            service.service_id,
            len(attendee_ids),
            len(first_timers),
        )
        return MarkResult(
            service_id=service.service_id,
            attendee_ids=attendee_ids,
            first_visit_ids=first_timers,
            skipped_ids=skipped,
            first_visit_at=service.service_datetime if first_timers else None,
        )

    def attendee_ids(self, service_id: int) -> list[int]:
        if not self._services.get_by_id(int(service_id)):
            raise NotFoundError(f"service {service_id} not found")
        return [r.person_id for r in self._attendance.list_for_service(int(service_id))]
