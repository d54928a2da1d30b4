from __future__ import annotations

from ...core.enums import FollowUpKind
from ...members.model import Member
from ...worship.model import Service
from .base import FollowUpStrategy


class AbsentStrategy(FollowUpStrategy):
    """Member missed the service."""

    kind = FollowUpKind.ABSENT

    def compose(self, *, member: Member, service: Service) -> str:
        day = service.service_datetime.strftime("%A")
        return (
            f"Hi {member.first_name}, we missed you at church on {day}. "
            "We hope you have a blessed week and look forward to seeing you soon!"
        )
