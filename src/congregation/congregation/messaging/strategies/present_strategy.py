from __future__ import annotations

from ...core.enums import FollowUpKind
from ...members.model import Member
from ...worship.model import Service
from .base import FollowUpStrategy


class PresentStrategy(FollowUpStrategy):
    """Member was at the service."""

    kind = FollowUpKind.PRESENT

    def compose(self, *, member: Member, service: Service) -> str:
        day = service.service_datetime.strftime("%A")
        return (
            f"Hi {member.first_name}, thanks for joining us at church this past {day}! "
            "We were blessed to have you with us."
        )
