from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.model import MarkResult


@dataclass(frozen=True)
class ImportRow:
    row_number: int
    first_name: str
    last_name: str
    phone_number: Optional[str]
    email: Optional[str] = None


@dataclass
class ImportSummary:
    created_ids: list[int] = field(default_factory=list)
    matched_ids: list[int] = field(default_factory=list)
    skipped_rows: list[int] = field(default_factory=list)
    attendance: Optional[MarkResult] = None

    @property
    def person_ids(self) -> list[int]:
        return self.matched_ids + self.created_ids
