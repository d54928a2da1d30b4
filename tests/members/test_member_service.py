import pytest

from congregation.core.exceptions import NotFoundError, ValidationError
from congregation.members.service import MemberService


def test_enroll_normalizes_phone(store):
    svc = MemberService(store.people)

    pid = svc.enroll_member(first_name=" Ruth ", last_name="Moab", phone_number="(555) 123-4567")

    person = store.people.get_by_id(pid)
    assert person.first_name == "Ruth"
    assert person.phone_number == "5551234567"
    assert person.is_active


def test_enroll_rejects_duplicate_phone(store):
    svc = MemberService(store.people)
    svc.enroll_member(first_name="A", last_name="B", phone_number="5551234567")

    with pytest.raises(ValidationError):
        svc.enroll_member(first_name="C", last_name="D", phone_number="555-123-4567")


def test_enroll_requires_phone(store):
    with pytest.raises(ValidationError):
        MemberService(store.people).enroll_member(first_name="A", last_name="B", phone_number="  ")


def test_deactivate_keeps_the_record(store):
    m = store.member("Leaving")
    svc = MemberService(store.people)

    svc.deactivate_member(m.person_id)

    assert store.people.get_by_id(m.person_id).is_active is False
    assert svc.list_active_members() == []


def test_deactivate_unknown_member(store):
    with pytest.raises(NotFoundError):
        MemberService(store.people).deactivate_member(404)
