from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Service:
    """One dated occurrence of a recurring worship service."""

    service_id: int
    service_datetime: datetime
    topic: str
    speaker: Optional[str] = None
