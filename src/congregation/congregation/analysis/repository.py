from __future__ import annotations

from typing import Protocol

from .model import Snapshot


class SnapshotRepository(Protocol):
    def load(self) -> Snapshot:
        """Active members, all services and all attendance from one consistent read."""

        raise NotImplementedError
