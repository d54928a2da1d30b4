from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, Mapping, Union

from ..attendance.model import AttendanceRecord
from ..worship.model import Service

log = logging.getLogger(__name__)


def index_services(services: Union[Mapping[int, Service], Iterable[Service]]) -> Dict[int, Service]:
    if isinstance(services, Mapping):
        return dict(services)
    return {s.service_id: s for s in services}


def resolve_last_attendance(
    records: Iterable[AttendanceRecord],
    services: Union[Mapping[int, Service], Iterable[Service]],
) -> Dict[int, datetime]:
    """person_id -> timestamp of the most recent service they attended.

    One pass over the attendance records, joined to the service calendar by id.
    People without a record are simply absent from the result. Records that
    point at an unknown service are logged and skipped.
    """
    by_id = index_services(services)
    last_seen: Dict[int, datetime] = {}
    dangling = 0

    for record in records:
        service = by_id.get(record.service_id)
        if service is None:
            dangling += 1
            log.warning(
                "attendance for person %s points at missing service %s; skipped",
                record.person_id,
                record.service_id,
            )
            continue

        current = last_seen.get(record.person_id)
        if current is None or service.service_datetime > current:
            last_seen[record.person_id] = service.service_datetime

    if dangling:
        log.info("resolved last attendance for %d people (%d dangling record(s))", len(last_seen), dangling)
    return last_seen
