from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Iterable, Optional

import pytest

from congregation.attendance.model import AttendanceRecord
from congregation.members.model import Member, Visitor
from congregation.worship.model import Service


class InMemoryPeople:
    def __init__(self):
        self._by_id: dict[int, object] = {}
        self._id = 0
        self.list_active_calls = 0

    def _next_id(self) -> int:
        self._id += 1
        return self._id

    def add(self, person):
        self._by_id[person.person_id] = person
        self._id = max(self._id, person.person_id)
        return person

    def get_by_id(self, person_id: int):
        return self._by_id.get(int(person_id))

    def get_many(self, person_ids):
        return [self._by_id[pid] for pid in person_ids if pid in self._by_id]

    def get_by_phone(self, phone_number: str):
        for p in self._by_id.values():
            if p.phone_number == phone_number:
                return p
        return None

    def list_active_members(self):
        self.list_active_calls += 1
        return [p for p in self._by_id.values() if isinstance(p, Member) and p.is_active]

    def create_member(self, *, first_name, last_name, phone_number, email=None) -> int:
        pid = self._next_id()
        self._by_id[pid] = Member(pid, first_name, last_name, phone_number, email)
        return pid

    def create_visitor(self, *, first_name, last_name, phone_number, email=None) -> int:
        pid = self._next_id()
        self._by_id[pid] = Visitor(pid, first_name, last_name, phone_number, email)
        return pid

    def set_active(self, person_id: int, *, is_active: bool) -> bool:
        p = self._by_id.get(person_id)
        if not isinstance(p, Member):
            return False
        self._by_id[person_id] = replace(p, is_active=is_active)
        return True

    def set_first_visit(self, person_id: int, *, first_visit: datetime) -> bool:
        p = self._by_id.get(person_id)
        if p is None or p.first_visit is not None:
            return False
        self._by_id[person_id] = replace(p, first_visit=first_visit)
        return True


class InMemoryServices:
    def __init__(self, people: Optional[InMemoryPeople] = None, attendance: Optional["InMemoryAttendance"] = None):
        self._by_id: dict[int, Service] = {}
        self._id = 0
        self._people = people
        self._attendance = attendance

    def add(self, service: Service) -> Service:
        self._by_id[service.service_id] = service
        self._id = max(self._id, service.service_id)
        return service

    def get_by_id(self, service_id: int) -> Optional[Service]:
        return self._by_id.get(int(service_id))

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda s: s.service_datetime, reverse=True)

    def list_recent(self, limit: int):
        return self.list_all()[:limit]

    def create(self, *, service_datetime, topic, speaker=None) -> int:
        self._id += 1
        self._by_id[self._id] = Service(self._id, service_datetime, topic, speaker)
        return self._id

    def update_datetime(self, *, service_id: int, service_datetime) -> bool:
        s = self._by_id.get(service_id)
        if not s:
            return False
        self._by_id[service_id] = replace(s, service_datetime=service_datetime)
        if self._people is not None and self._attendance is not None:
            for r in self._attendance.list_for_service(service_id):
                p = self._people.get_by_id(r.person_id)
                if p is not None and p.first_visit == s.service_datetime:
                    self._people.add(replace(p, first_visit=service_datetime))
        return True


class InMemoryAttendance:
    def __init__(self):
        # dict keeps insertion order and makes the (service, person) pair unique
        self._pairs: dict[tuple[int, int], None] = {}
        self.list_all_calls = 0

    def add(self, service_id: int, person_id: int) -> None:
        self._pairs[(service_id, person_id)] = None

    def list_all(self):
        self.list_all_calls += 1
        return [AttendanceRecord(service_id=s, person_id=p) for (s, p) in self._pairs]

    def list_for_service(self, service_id: int):
        return [r for r in self.list_all() if r.service_id == service_id]

    def list_for_services(self, service_ids):
        wanted = set(service_ids)
        return [r for r in self.list_all() if r.service_id in wanted]

    def replace_for_service(self, service_id: int, person_ids: Iterable[int]) -> int:
        for key in [k for k in self._pairs if k[0] == service_id]:
            del self._pairs[key]
        ids = list(person_ids)
        for pid in ids:
            self._pairs[(service_id, pid)] = None
        return len(ids)

    def has_attendance_elsewhere(self, person_id: int, *, exclude_service_id: int) -> bool:
        return any(p == person_id and s != exclude_service_id for (s, p) in self._pairs)


@dataclass
class Store:
    now: datetime
    people: InMemoryPeople = field(default_factory=InMemoryPeople)
    attendance: InMemoryAttendance = field(default_factory=InMemoryAttendance)
    services: InMemoryServices = field(init=False)

    def __post_init__(self):
        self.services = InMemoryServices(self.people, self.attendance)

    def member(self, first_name: str, *, phone: Optional[str] = None, active: bool = True, first_visit=None) -> Member:
        pid = self.people.create_member(
            first_name=first_name,
            last_name="Test",
            phone_number=phone or f"555{self.people._id + 1:07d}",
        )
        m = replace(self.people.get_by_id(pid), is_active=active, first_visit=first_visit)
        return self.people.add(m)

    def service(self, *, days_ago: int, topic: str = "Sunday worship") -> Service:
        sid = self.services.create(service_datetime=self.now - timedelta(days=days_ago), topic=topic)
        return self.services.get_by_id(sid)

    def attend(self, service: Service, *people) -> None:
        for p in people:
            self.attendance.add(service.service_id, p.person_id)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 1, 10, 0, 0)


@pytest.fixture
def store(fixed_now) -> Store:
    return Store(now=fixed_now)
