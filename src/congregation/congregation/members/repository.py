from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence, Union

from .model import Member, Visitor

Person = Union[Member, Visitor]


class PeopleRepository(Protocol):
    """Repository interface for members and visitors.

    Members and visitors share one id space, so attendance can point at either.
    """

    def get_by_id(self, person_id: int) -> Optional[Person]:
        raise NotImplementedError

    def get_many(self, person_ids: Sequence[int]) -> Sequence[Person]:
        raise NotImplementedError

    def get_by_phone(self, phone_number: str) -> Optional[Person]:
        raise NotImplementedError

    def list_active_members(self) -> Sequence[Member]:
        raise NotImplementedError

    def create_member(
        self,
        *,
        first_name: str,
        last_name: str,
        phone_number: str,
        email: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def create_visitor(
        self,
        *,
        first_name: str,
        last_name: str,
        phone_number: str,
        email: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def set_active(self, person_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def set_first_visit(self, person_id: int, *, first_visit: datetime) -> bool:
        """Stamp ``first_visit`` only if it is still unset."""

        raise NotImplementedError
