from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_phone
from ..core.exceptions import NotFoundError, ValidationError
from .model import Member, Visitor
from .repository import PeopleRepository, Person

log = logging.getLogger(__name__)


class MemberService:
    """Use cases: enroll/deactivate members, register visitors."""

    def __init__(self, people: PeopleRepository):
        self._people = people

    def enroll_member(
        self,
        *,
        first_name: str,
        last_name: str,
        phone_number: str,
        email: Optional[str] = None,
    ) -> int:
        first_name = require_non_empty(first_name, "first_name")
        last_name = require_non_empty(last_name, "last_name")
        phone = require_phone(phone_number)

        if self._people.get_by_phone(phone):
            raise ValidationError(f"phone number {phone} is already registered")

        person_id = self._people.create_member(
            first_name=first_name,
            last_name=last_name,
            phone_number=phone,
            email=(email or "").strip() or None,
        )
        log.info("enrolled member %s (%s %s)", person_id, first_name, last_name)
        return person_id

    def register_visitor(
        self,
        *,
        first_name: str,
        last_name: str,
        phone_number: str,
        email: Optional[str] = None,
    ) -> int:
        phone = require_phone(phone_number)
        if self._people.get_by_phone(phone):
            raise ValidationError(f"phone number {phone} is already registered")

        return self._people.create_visitor(
            first_name=require_non_empty(first_name, "first_name"),
            last_name=(last_name or "").strip(),
            phone_number=phone,
            email=(email or "").strip() or None,
        )

    def deactivate_member(self, person_id: int) -> None:
        person = self._people.get_by_id(person_id)
        if not isinstance(person, Member):
            raise NotFoundError(f"member {person_id} not found")
        if not person.is_active:
            return
        self._people.set_active(person_id, is_active=False)
        log.info("deactivated member %s", person_id)

    def list_active_members(self) -> Sequence[Member]:
        return self._people.list_active_members()

    def find_by_phone(self, phone_number: str) -> Optional[Person]:
        return self._people.get_by_phone(require_phone(phone_number))


def person_to_dict(person: Person) -> dict:
    out = {
        "person_id": person.person_id,
        "kind": person.kind.value,
        "name": person.display_name,
        "phone_number": person.phone_number,
        "email": person.email,
        "first_visit": person.first_visit.isoformat() if person.first_visit else None,
    }
    if isinstance(person, Visitor):
        out["status"] = person.status.value
    else:
        out["is_active"] = person.is_active
    return out
