from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_SMS_MAX_CONCURRENCY
from ..core.exceptions import MessagingError, NotFoundError
from ..members.repository import PeopleRepository
from ..worship.repository import ServiceRepository
from .factory import FollowUpStrategyFactory
from .gateway import SmsGateway
from .model import DeliveryOutcome, OutboundMessage

log = logging.getLogger(__name__)


class FollowUpService:
    """Compose and dispatch SMS follow-ups, one independent attempt per recipient."""

    def __init__(
        self,
        people: PeopleRepository,
        services: ServiceRepository,
        attendance: AttendanceRepository,
        gateway: SmsGateway,
        *,
        strategy_factory: Optional[FollowUpStrategyFactory] = None,
        max_concurrency: int = DEFAULT_SMS_MAX_CONCURRENCY,
    ):
        self._people = people
        self._services = services
        self._attendance = attendance
        self._gateway = gateway
        self._factory = strategy_factory or FollowUpStrategyFactory()
        self._max_concurrency = max(1, int(max_concurrency))

    async def compose_attendance_follow_ups(self, service_id: int) -> List[OutboundMessage]:
        service = await asyncio.to_thread(self._services.get_by_id, int(service_id))
        if not service:
            raise NotFoundError(f"service {service_id} not found")

        members, records = await asyncio.gather(
            asyncio.to_thread(self._people.list_active_members),
            asyncio.to_thread(self._attendance.list_for_service, service.service_id),
        )
        attended = {r.person_id for r in records}

        messages = []
        for member in members:
            strategy = self._factory.for_member(attended=member.person_id in attended)
            messages.append(
                OutboundMessage(
                    person_id=member.person_id,
                    name=member.display_name,
                    phone_number=member.phone_number,
                    body=strategy.compose(member=member, service=service),
                )
            )
        return messages

    async def send_attendance_follow_ups(self, service_id: int) -> List[DeliveryOutcome]:
        messages = await self.compose_attendance_follow_ups(service_id)
        return await self.send_messages(messages)

    async def send_messages(self, messages: Sequence[OutboundMessage]) -> List[DeliveryOutcome]:
        """Attempt every message; failures are reported per recipient, never raised."""
        limit = asyncio.Semaphore(self._max_concurrency)

        async def _deliver(message: OutboundMessage) -> DeliveryOutcome:
            if not message.phone_number:
                return DeliveryOutcome(message.person_id, message.name, success=False, error="no phone number")
            async with limit:
                try:
                    sid = await asyncio.to_thread(self._gateway.send, to=message.phone_number, body=message.body)
                except MessagingError as e:
                    log.warning("sms to person %s failed: %s", message.person_id, e)
                    return DeliveryOutcome(message.person_id, message.name, success=False, error=str(e))
                except Exception as e:
                    log.exception("sms to person %s failed unexpectedly", message.person_id)
                    return DeliveryOutcome(message.person_id, message.name, success=False, error=str(e))
            return DeliveryOutcome(message.person_id, message.name, success=True, sid=sid)

        outcomes = await asyncio.gather(*(_deliver(m) for m in messages))
        sent = sum(1 for o in outcomes if o.success)
        log.info("sms follow-ups: %d sent, %d failed", sent, len(outcomes) - sent)
        return list(outcomes)


def outcome_to_dict(outcome: DeliveryOutcome) -> dict:
    return {
        "person_id": outcome.person_id,
        "name": outcome.name,
        "success": outcome.success,
        "sid": outcome.sid,
        "error": outcome.error,
    }
