from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..attendance.service import AttendanceService
from ..members.repository import PeopleRepository
from .model import ImportRow, ImportSummary
from .reader import Source, iter_rows, read_sheet

log = logging.getLogger(__name__)

DEFAULT_FIRST_NAME = "Visitor"


class PeopleImportService:
    """Bulk import: attach rows to people by phone number or create visitors."""

    def __init__(self, people: PeopleRepository, attendance: AttendanceService):
        self._people = people
        self._attendance = attendance

    def import_file(
        self,
        source: Source,
        *,
        filename: Optional[str] = None,
        service_id: Optional[int] = None,
    ) -> ImportSummary:
        df = read_sheet(source, filename=filename)
        return self.import_rows(iter_rows(df), service_id=service_id)

    def import_rows(self, rows: Iterable[ImportRow], *, service_id: Optional[int] = None) -> ImportSummary:
        # Unknown service fails before any visitor is created.
        present = self._attendance.attendee_ids(service_id) if service_id is not None else []
        summary = ImportSummary()

        for row in rows:
            if not row.phone_number:
                log.warning("import row %d skipped: no phone number", row.row_number)
                summary.skipped_rows.append(row.row_number)
                continue

            existing = self._people.get_by_phone(row.phone_number)
            if existing:
                if existing.person_id not in summary.person_ids:
                    summary.matched_ids.append(existing.person_id)
                continue

            person_id = self._people.create_visitor(
                first_name=row.first_name or DEFAULT_FIRST_NAME,
                last_name=row.last_name,
                phone_number=row.phone_number,
                email=row.email,
            )
            summary.created_ids.append(person_id)

        if service_id is not None and summary.person_ids:
            summary.attendance = self._attendance.mark_attendance(service_id, present + summary.person_ids)

        log.info(
            "import: %d matched, %d created, %d skipped",
            len(summary.matched_ids),
            len(summary.created_ids),
            len(summary.skipped_rows),
        )
        return summary
