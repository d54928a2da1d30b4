from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_service(self, service_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_services(self, service_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def replace_for_service(self, service_id: int, person_ids: Iterable[int]) -> int:
        """Clear every record of the service, then write one per person.

        Returns the number of records written.
        """

        raise NotImplementedError

    def has_attendance_elsewhere(self, person_id: int, *, exclude_service_id: int) -> bool:
        raise NotImplementedError
