from __future__ import annotations

from enum import Enum


class PersonKind(str, Enum):
    """Which variant a row of the people table is."""

    MEMBER = "member"
    VISITOR = "visitor"


class VisitorStatus(str, Enum):
    """Follow-up state of a visitor."""

    NEW = "new"
    CONTACTED = "contacted"
    ATTENDING = "attending"


class FollowUpKind(str, Enum):
    """Which follow-up message a member gets after a service."""

    PRESENT = "present"
    ABSENT = "absent"
