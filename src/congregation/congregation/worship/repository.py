from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Service


class ServiceRepository(Protocol):
    def get_by_id(self, service_id: int) -> Optional[Service]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Service]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[Service]:
        """Most recent first, by ``service_datetime``."""

        raise NotImplementedError

    def create(self, *, service_datetime: datetime, topic: str, speaker: Optional[str] = None) -> int:
        raise NotImplementedError

    def update_datetime(self, *, service_id: int, service_datetime: datetime) -> bool:
        """Move a service to a new date in one transaction.

        Attendees whose ``first_visit`` was stamped from this service get the
        new date too. Returns False when the service does not exist.
        """

        raise NotImplementedError
