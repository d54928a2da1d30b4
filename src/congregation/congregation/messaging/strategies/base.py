from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import FollowUpKind
from ...members.model import Member
from ...worship.model import Service


class FollowUpStrategy(ABC):
    """Strategy Pattern: encapsulate what a member is told after a service."""

    kind: FollowUpKind

    @abstractmethod
    def compose(self, *, member: Member, service: Service) -> str:
        raise NotImplementedError
