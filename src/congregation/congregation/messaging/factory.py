from __future__ import annotations

from dataclasses import dataclass, field

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import FollowUpStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class FollowUpStrategyFactory:
    """Factory Pattern: choose the follow-up message for a member."""

    present: FollowUpStrategy = field(default_factory=PresentStrategy)
    absent: FollowUpStrategy = field(default_factory=AbsentStrategy)

    def for_member(self, *, attended: bool) -> FollowUpStrategy:
        return self.present if attended else self.absent
