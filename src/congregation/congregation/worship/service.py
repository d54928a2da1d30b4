from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_RECENT_SERVICES_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from .model import Service
from .repository import ServiceRepository


class ServiceCalendarService:
    """Use cases around the service calendar (create, list, date correction)."""

    def __init__(self, services: ServiceRepository):
        self._services = services

    def create_service(self, *, service_datetime: datetime, topic: str, speaker: Optional[str] = None) -> int:
        if service_datetime is None:
            raise ValidationError("service_datetime is required")
        topic = require_non_empty(topic, "topic")
        speaker = speaker.strip() if speaker else None
        return self._services.create(service_datetime=service_datetime, topic=topic, speaker=speaker or None)

    def get_service(self, service_id: int) -> Service:
        service = self._services.get_by_id(int(service_id))
        if not service:
            raise NotFoundError(f"service {service_id} not found")
        return service

    def recent_services(self, limit: int = DEFAULT_RECENT_SERVICES_LIMIT) -> Sequence[Service]:
        if int(limit) <= 0:
            raise ValidationError("limit must be positive")
        return self._services.list_recent(int(limit))

    def correct_date(self, *, service_id: int, service_datetime: datetime) -> None:
        """Administrator date correction; attendance and first visits stay attached."""
        self.get_service(service_id)
        self._services.update_datetime(service_id=int(service_id), service_datetime=service_datetime)


def service_to_dict(service: Service) -> dict:
    return {
        "service_id": service.service_id,
        "service_datetime": service.service_datetime.isoformat(),
        "topic": service.topic,
        "speaker": service.speaker,
    }
