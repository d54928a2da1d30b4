import asyncio

import pytest

from congregation.analysis.outreach import OutreachService
from congregation.core.exceptions import NotFoundError, ValidationError


def _svc(store):
    return OutreachService(store.people, store.services, store.attendance)


def test_absent_from_last_three_services(store):
    regular = store.member("Regular")
    lapsed = store.member("Lapsed")
    once = store.member("Once")
    old = store.service(days_ago=28)
    s1 = store.service(days_ago=14)
    store.service(days_ago=7)
    s3 = store.service(days_ago=0)
    store.attend(s3, regular)
    store.attend(s1, once)
    store.attend(old, lapsed)

    absent = asyncio.run(_svc(store).absent_from_last_services(3))

    assert absent == [lapsed]


def test_fewer_services_than_requested_uses_all_of_them(store):
    a = store.member("A")
    b = store.member("B")
    only = store.service(days_ago=3)
    store.attend(only, a)

    absent = asyncio.run(_svc(store).absent_from_last_services(3))

    assert absent == [b]


def test_no_services_means_nobody_is_absent(store):
    store.member("A")

    assert asyncio.run(_svc(store).absent_from_last_services(3)) == []


def test_inactive_members_are_not_listed(store):
    store.member("Gone", active=False)
    store.service(days_ago=1)

    assert asyncio.run(_svc(store).absent_from_last_services(1)) == []


def test_window_must_be_positive(store):
    with pytest.raises(ValidationError):
        asyncio.run(_svc(store).absent_from_last_services(0))


def test_first_time_attendees(store):
    service = store.service(days_ago=0)
    earlier = store.service(days_ago=7)
    newcomer = store.member("New", first_visit=service.service_datetime)
    regular = store.member("Regular", first_visit=earlier.service_datetime)
    no_marker = store.member("NoMarker")
    store.attend(earlier, regular)
    store.attend(service, newcomer, regular, no_marker)

    people = asyncio.run(_svc(store).first_time_attendees(service.service_id))

    assert people == [newcomer]


def test_first_time_attendee_must_have_attended(store):
    service = store.service(days_ago=0)
    store.member("Marked", first_visit=service.service_datetime)

    assert asyncio.run(_svc(store).first_time_attendees(service.service_id)) == []


def test_first_time_attendees_unknown_service(store):
    with pytest.raises(NotFoundError):
        asyncio.run(_svc(store).first_time_attendees(999))
