from datetime import UTC, datetime

from fastapi.testclient import TestClient

from rollcall.services.roster import import_roster
from tests.conftest import roster_entry, roster_payload


def _seed_roster(client: TestClient) -> None:
    response = client.post(
        "/students/roster",
        json=roster_payload(("50000001", "Alice Adams", "aadams"), ("50000002", "Bob Brown", "bbrown")),
    )
    assert response.status_code == 200, response.text
    assert response.json() == {"created": 2, "updated": 0, "dropped": 0, "unchanged": 0}


def test_health_endpoint(app_client: TestClient):
    response = app_client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload.get("status") == "ok"
    assert isinstance(payload.get("version"), str)


def test_system_info_reports_store_state(app_client: TestClient):
    response = app_client.get("/system/info")
    assert response.status_code == 200
    payload = response.json()
    assert payload["active_students"] == 0
    assert payload["first_created"] is not None
    assert payload["summary_last_updated"] is None


def test_pick_on_empty_roster_is_rejected(app_client: TestClient):
    response = app_client.post("/students/pick", json={"query": ""})
    assert response.status_code == 409
    assert response.json()["error"] == "NoStudents"


def test_roster_import_rebuilds_index_for_pick_and_search(app_client: TestClient):
    _seed_roster(app_client)

    pick_response = app_client.post("/students/pick", json={"query": "bob"})
    assert pick_response.status_code == 200, pick_response.text
    assert pick_response.json() == {"id": 2, "name": "Bob Brown", "username": "bbrown"}

    random_response = app_client.post("/students/pick", json={})
    assert random_response.json()["id"] in {1, 2}

    search_response = app_client.get("/students/search", params={"q": "adams", "limit": 1})
    assert search_response.status_code == 200
    matches = search_response.json()
    assert len(matches) == 1
    assert matches[0]["student"]["name"] == "Alice Adams"

    students = app_client.get("/students").json()
    assert [student["roster_number"] for student in students] == ["50000001", "50000002"]


def test_pick_sees_roster_imported_outside_the_api(app_client: TestClient, db_session):
    _seed_roster(app_client)
    assert app_client.post("/students/pick", json={"query": "bob"}).json()["id"] == 2

    import_roster(db_session, [roster_entry("50000001", "Alice Adams", "aadams")])

    response = app_client.post("/students/pick", json={"query": "bob"})
    assert response.status_code == 200, response.text
    assert response.json()["id"] == 1


def test_record_refresh_and_correct_flow(app_client: TestClient):
    _seed_roster(app_client)

    record_response = app_client.post("/events", json={"student_id": 1, "category": "question", "satisfactory": True})
    assert record_response.status_code == 200, record_response.text
    event_id = record_response.json()["id"]
    app_client.post("/events", json={"student_id": 2, "category": "homework", "satisfactory": False})

    summary = app_client.get("/summary").json()
    assert summary["stale"] is True

    refreshed = app_client.post("/summary/refresh").json()
    assert refreshed["stale"] is False
    assert [(item["student_id"], item["points"]) for item in refreshed["items"]] == [(1, 1), (2, 0)]

    today = datetime.now(UTC).date().isoformat()
    window = app_client.get("/students/1/events", params={"day": today}).json()
    assert [(item["event_id"], item["category"], item["satisfactory"]) for item in window] == [
        (event_id, "question", True)
    ]

    correction = app_client.post(
        "/students/1/events/corrections",
        json={"day": today, "edits": [{"event_id": event_id, "satisfactory": False}]},
    )
    assert correction.status_code == 200, correction.text
    assert correction.json()["events"][0]["satisfactory"] is False

    refreshed = app_client.post("/summary/refresh").json()
    assert [(item["student_id"], item["points"]) for item in refreshed["items"]] == [(1, 0), (2, 0)]


def test_correction_outside_window_is_rejected(app_client: TestClient):
    _seed_roster(app_client)
    bob_event = app_client.post("/events", json={"student_id": 2, "category": "question", "satisfactory": True}).json()["id"]

    today = datetime.now(UTC).date().isoformat()
    response = app_client.post(
        "/students/1/events/corrections",
        json={"day": today, "edits": [{"event_id": bob_event, "satisfactory": False}]},
    )
    assert response.status_code == 409
    assert response.json()["error"] == "EventNotFound"


def test_record_unknown_references(app_client: TestClient):
    _seed_roster(app_client)

    response = app_client.post("/events", json={"student_id": 99, "category": "question", "satisfactory": True})
    assert response.status_code == 404
    assert response.json()["error"] == "UnknownStudent"

    response = app_client.post("/events", json={"student_id": 1, "category": "dance", "satisfactory": True})
    assert response.status_code == 404
    assert response.json()["error"] == "UnknownCategory"


def test_categories_are_listed_and_appended(app_client: TestClient):
    names = [item["name"] for item in app_client.get("/categories").json()]
    assert names == ["comment", "error", "homework", "practice", "question", "review"]

    response = app_client.post("/categories", json={"name": "presentation"})
    assert response.status_code == 200
    assert response.json()["name"] == "presentation"
    assert len(app_client.get("/categories").json()) == 7


def test_export_returns_tab_separated_upload(app_client: TestClient):
    _seed_roster(app_client)
    app_client.post("/events", json={"student_id": 1, "category": "question", "satisfactory": True})

    response = app_client.get("/summary/export")
    assert response.status_code == 200
    assert response.text.splitlines() == [
        '"Username"\t"Participation [Total Pts: 1 Score]"',
        '"aadams"\t1',
        '"bbrown"\t0',
    ]
