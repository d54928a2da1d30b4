from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OutboundMessage:
    person_id: int
    name: str
    phone_number: Optional[str]
    body: str


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one delivery attempt; a batch returns one per recipient."""

    person_id: int
    name: str
    success: bool
    sid: Optional[str] = None
    error: Optional[str] = None
