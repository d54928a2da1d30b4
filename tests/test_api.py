import pytest

from congregation.analysis.thresholds import ThresholdSet
from congregation.container import assemble_container
from congregation.core.exceptions import MessagingError
from congregation.main import create_app


class RecordingGateway:
    def __init__(self):
        self.sent = []

    def send(self, *, to: str, body: str) -> str:
        if to.endswith("9"):
            raise MessagingError("undeliverable")
        self.sent.append(to)
        return "SM1"


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = assemble_container(
        people_repo=store.people,
        services_repo=store.services,
        attendance_repo=store.attendance,
        thresholds=ThresholdSet.parse("90,182,365,730"),
        gateway=RecordingGateway(),
    )
    app = create_app(container=container)
    return app.test_client()


def test_enroll_and_list_members(client):
    resp = client.post("/api/members", json={"first_name": "Ada", "last_name": "Lovelace", "phone_number": "555 0101"})
    assert resp.status_code == 201

    members = client.get("/api/members").get_json()["members"]
    assert [m["name"] for m in members] == ["Ada Lovelace"]
    assert members[0]["phone_number"] == "5550101"


def test_validation_error_is_400(client):
    resp = client.post("/api/members", json={"first_name": "", "last_name": "X", "phone_number": "1"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_mark_attendance_with_form_checkboxes(client, store):
    a, b = store.member("A"), store.member("B")
    service = store.service(days_ago=0)

    resp = client.post(
        "/api/attendance/mark",
        data={"service_id": str(service.service_id), "attendees": [str(a.person_id), str(b.person_id)]},
    )

    assert resp.status_code == 200
    assert resp.get_json()["attendee_ids"] == [a.person_id, b.person_id]


def test_mark_attendance_unknown_service_is_404(client):
    resp = client.post("/api/attendance/mark", json={"service_id": 999, "attendees": []})

    assert resp.status_code == 404


def test_lapsed_report_lists_never_attended_at_top_tier(client, store):
    m = store.member("Ghost")

    body = client.get("/api/reports/lapsed-members").get_json()

    assert body["thresholds"] == {"1": 90, "2": 182, "3": 365, "4": 730}
    [row] = body["lapsed_members"]
    assert row["person_id"] == m.person_id
    assert row["tier"] == 4
    assert row["never_attended"] is True


def test_bad_threshold_override_is_400(client):
    resp = client.get("/api/reports/lapsed-members?thresholds=300,100")

    assert resp.status_code == 400


def test_lapsed_report_csv(client, store):
    store.member("Ghost")

    resp = client.get("/api/reports/lapsed-members.csv")

    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("tier,person_id,name")


def test_send_sms_reports_each_recipient(client, store):
    store.member("Ok", phone="5550000001")
    store.member("Bad", phone="5550000009")
    service = store.service(days_ago=0)

    body = client.post(f"/api/services/{service.service_id}/send-sms").get_json()

    assert body["sent"] == 1
    assert body["failed"] == 1
    assert {r["name"]: r["success"] for r in body["results"]} == {"Ok Test": True, "Bad Test": False}
