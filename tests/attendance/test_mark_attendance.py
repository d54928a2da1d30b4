from __future__ import annotations

import pytest

from congregation.attendance.service import AttendanceService, normalize_attendees
from congregation.core.exceptions import NotFoundError, ValidationError


def _svc(store) -> AttendanceService:
    return AttendanceService(store.attendance, store.people, store.services)


def _pairs(store, service):
    return sorted(r.person_id for r in store.attendance.list_for_service(service.service_id))


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("7", [7]),
        (7, [7]),
        (["3", "1", "3", 1, ""], [3, 1]),
        ([], []),
    ],
)
def test_normalize_attendees(raw, expected):
    assert normalize_attendees(raw) == expected


def test_normalize_rejects_garbage():
    with pytest.raises(ValidationError) as exc_info:
        normalize_attendees(["1", "abc"])

    assert exc_info.value.__suppress_context__ is True


def test_single_scalar_attendee_is_recorded_once(store):
    m = store.member("Solo")
    service = store.service(days_ago=0)

    result = _svc(store).mark_attendance(service.service_id, str(m.person_id))

    assert result.attendee_ids == (m.person_id,)
    assert _pairs(store, service) == [m.person_id]


def test_resubmission_replaces_the_attendee_set(store):
    a = store.member("A")
    b = store.member("B")
    c = store.member("C")
    service = store.service(days_ago=0)
    other = store.service(days_ago=7)
    store.attend(other, a)

    svc = _svc(store)
    svc.mark_attendance(service.service_id, [a.person_id, b.person_id])
    svc.mark_attendance(service.service_id, [c.person_id, b.person_id])

    assert _pairs(store, service) == [b.person_id, c.person_id]
    assert _pairs(store, other) == [a.person_id]


def test_marking_twice_is_idempotent(store):
    a = store.member("A")
    b = store.member("B")
    service = store.service(days_ago=0)
    svc = _svc(store)

    svc.mark_attendance(service.service_id, [a.person_id, b.person_id, a.person_id])
    svc.mark_attendance(service.service_id, [b.person_id, a.person_id])

    assert _pairs(store, service) == [a.person_id, b.person_id]


def test_empty_submission_clears_the_service(store):
    a = store.member("A")
    service = store.service(days_ago=0)
    store.attend(service, a)

    _svc(store).mark_attendance(service.service_id, [])

    assert _pairs(store, service) == []


def test_first_visit_is_stamped_for_first_ever_attendance(store):
    newcomer = store.member("New")
    service = store.service(days_ago=0)

    result = _svc(store).mark_attendance(service.service_id, [newcomer.person_id])

    assert result.first_visit_ids == (newcomer.person_id,)
    assert store.people.get_by_id(newcomer.person_id).first_visit == service.service_datetime


def test_existing_first_visit_is_never_changed(store):
    earlier = store.service(days_ago=30)
    regular = store.member("Regular", first_visit=earlier.service_datetime)
    service = store.service(days_ago=0)

    result = _svc(store).mark_attendance(service.service_id, [regular.person_id])

    assert result.first_visit_ids == ()
    assert store.people.get_by_id(regular.person_id).first_visit == earlier.service_datetime


def test_prior_attendance_elsewhere_blocks_first_visit(store):
    m = store.member("Untracked")
    earlier = store.service(days_ago=30)
    store.attend(earlier, m)
    service = store.service(days_ago=0)

    _svc(store).mark_attendance(service.service_id, [m.person_id])

    assert store.people.get_by_id(m.person_id).first_visit is None


def test_unknown_people_are_skipped(store):
    m = store.member("Known")
    service = store.service(days_ago=0)

    result = _svc(store).mark_attendance(service.service_id, [m.person_id, 999])

    assert result.skipped_ids == (999,)
    assert _pairs(store, service) == [m.person_id]


def test_unknown_service(store):
    with pytest.raises(NotFoundError):
        _svc(store).mark_attendance(42, [1])
