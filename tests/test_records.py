"""Tests for owner-scoped record CRUD under /api/records."""

from datetime import datetime, timedelta

from health_tracker.extensions import db
from health_tracker.models import HealthRecord, VitalSign


def morning(**extra):
    return {"timeOfDay": "morning", "heartRate": 64, "bloodPressureSystolic": 118,
            "bloodPressureDiastolic": 76, **extra}


class TestCreateRecord:
    def test_round_trip(self, client, auth_headers, create_record) -> None:
        created = create_record(weight=70.5, steps=8000, sleepHours=7.5, notes="felt good")

        response = client.get(f"/api/records/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        record = response.get_json()["record"]
        assert record["weight"] == 70.5
        assert record["steps"] == 8000
        assert record["sleepHours"] == 7.5
        assert record["notes"] == "felt good"
        assert record["vitalSigns"] == []

    def test_created_response(self, client, user, auth_headers) -> None:
        response = client.post("/api/records", json={"weight": 80}, headers=auth_headers)
        assert response.status_code == 201
        body = response.get_json()
        assert body["message"] == "Record created successfully"
        assert body["record"]["id"]
        assert body["record"]["userId"] == user.id
        assert body["record"]["date"]

    def test_defaults_date_to_now(self, create_record) -> None:
        before = datetime.utcnow() - timedelta(seconds=5)
        record = create_record(steps=100)
        assert datetime.fromisoformat(record["date"]) >= before

    def test_optional_fields_stay_null(self, create_record) -> None:
        record = create_record()
        assert record["weight"] is None
        assert record["steps"] is None
        assert record["sleepHours"] is None
        assert record["notes"] is None

    def test_nested_vital_signs(self, create_record) -> None:
        record = create_record(
            weight=70,
            vitalSigns=[morning(), {"timeOfDay": "evening", "heartRate": 80, "temperature": 36.8,
                                    "oxygenSaturation": 98, "notes": "after run"}],
        )
        vitals = record["vitalSigns"]
        assert len(vitals) == 2
        assert {v["timeOfDay"] for v in vitals} == {"morning", "evening"}
        assert all(v["recordId"] == record["id"] for v in vitals)
        evening = next(v for v in vitals if v["timeOfDay"] == "evening")
        assert evening["temperature"] == 36.8
        assert evening["oxygenSaturation"] == 98

    def test_one_invalid_vital_sign_aborts_everything(self, client, auth_headers) -> None:
        response = client.post(
            "/api/records",
            json={"weight": 70, "vitalSigns": [morning(), {"timeOfDay": "evening", "heartRate": 20}]},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.get_json()["error"] == "Heart rate must be between 30-250 bpm"
        assert HealthRecord.query.count() == 0
        assert VitalSign.query.count() == 0

    def test_invalid_time_of_day_aborts(self, client, auth_headers) -> None:
        response = client.post(
            "/api/records",
            json={"vitalSigns": [{"timeOfDay": "noon", "heartRate": 70}]},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.get_json()["error"] == "timeOfDay must be: morning, afternoon, evening, or night"
        assert HealthRecord.query.count() == 0

    def test_invalid_daily_metric(self, client, auth_headers) -> None:
        response = client.post("/api/records", json={"weight": 0}, headers=auth_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Weight must be positive"

        response = client.post("/api/records", json={"sleepHours": 25}, headers=auth_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Sleep hours must be between 0-24"


    def test_fractional_heart_rate_rejected(self, client, auth_headers) -> None:
        response = client.post(
            "/api/records",
            json={"steps": 8000, "vitalSigns": [{"timeOfDay": "morning", "heartRate": 250.9}]},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert HealthRecord.query.count() == 0

    def test_malformed_json_rejected(self, client, auth_headers) -> None:
        response = client.post(
            "/api/records",
            data='{"weight": 0,',
            content_type="application/json",
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.get_json()["error"] == "Request body must be valid JSON"
        assert HealthRecord.query.count() == 0

    def test_empty_body_creates_blank_record(self, client, auth_headers) -> None:
        response = client.post("/api/records", headers=auth_headers)
        assert response.status_code == 201
        assert HealthRecord.query.count() == 1


class TestListRecords:
    def test_lists_only_own_records(self, client, auth_headers, other_headers, create_record) -> None:
        create_record(steps=1)
        create_record(steps=2)
        create_record(headers=other_headers, steps=3)

        response = client.get("/api/records", headers=auth_headers)

        body = response.get_json()
        assert response.status_code == 200
        assert body["count"] == 2
        assert sorted(r["steps"] for r in body["records"]) == [1, 2]

    def test_newest_date_first_and_limit(self, client, auth_headers, create_record) -> None:
        for day in ("2024-01-01", "2024-01-03", "2024-01-02"):
            create_record(date=day)

        response = client.get("/api/records?limit=2", headers=auth_headers)

        dates = [r["date"][:10] for r in response.get_json()["records"]]
        assert dates == ["2024-01-03", "2024-01-02"]

    def test_sort_by_steps(self, client, auth_headers, create_record) -> None:
        for steps in (500, 9000, 3000):
            create_record(steps=steps)

        response = client.get("/api/records?sortBy=steps", headers=auth_headers)

        assert [r["steps"] for r in response.get_json()["records"]] == [9000, 3000, 500]

    def test_unknown_sort_falls_back_to_date(self, client, auth_headers, create_record) -> None:
        create_record(date="2024-01-01")
        create_record(date="2024-02-01")
        response = client.get("/api/records?sortBy=password_hash", headers=auth_headers)
        assert response.status_code == 200
        assert response.get_json()["records"][0]["date"].startswith("2024-02-01")

    def test_invalid_limit(self, client, auth_headers) -> None:
        assert client.get("/api/records?limit=0", headers=auth_headers).status_code == 400
        assert client.get("/api/records?limit=abc", headers=auth_headers).status_code == 400

    def test_default_limit(self, app, client, auth_headers, create_record) -> None:
        app.config["DEFAULT_RECORDS_LIMIT"] = 3
        for _ in range(4):
            create_record()
        assert client.get("/api/records", headers=auth_headers).get_json()["count"] == 3

    def test_vital_signs_nested_in_timestamp_order(self, client, auth_headers, create_record) -> None:
        create_record(vitalSigns=[
            {"timeOfDay": "evening", "timestamp": "2024-01-01T20:00:00"},
            {"timeOfDay": "morning", "timestamp": "2024-01-01T08:00:00"},
        ])
        record = client.get("/api/records", headers=auth_headers).get_json()["records"][0]
        assert [v["timeOfDay"] for v in record["vitalSigns"]] == ["morning", "evening"]


class TestUpdateRecord:
    def test_partial_update_leaves_other_fields(self, client, auth_headers, create_record) -> None:
        record = create_record(weight=70, steps=5000, sleepHours=8, notes="a")

        response = client.put(f"/api/records/{record['id']}", json={"steps": 6000}, headers=auth_headers)

        assert response.status_code == 200
        updated = response.get_json()["record"]
        assert updated["steps"] == 6000
        assert updated["weight"] == 70
        assert updated["sleepHours"] == 8
        assert updated["notes"] == "a"

    def test_explicit_null_clears(self, client, auth_headers, create_record) -> None:
        record = create_record(weight=70, notes="a")
        response = client.put(f"/api/records/{record['id']}", json={"notes": None}, headers=auth_headers)
        assert response.get_json()["record"]["notes"] is None
        assert response.get_json()["record"]["weight"] == 70

    def test_update_validates(self, client, auth_headers, create_record) -> None:
        record = create_record(weight=70)
        response = client.put(f"/api/records/{record['id']}", json={"weight": -1}, headers=auth_headers)
        assert response.status_code == 400
        assert db.session.get(HealthRecord, record["id"]).weight == 70

    def test_update_ignores_date_and_vitals(self, client, auth_headers, create_record) -> None:
        record = create_record(date="2024-01-01", vitalSigns=[morning()])
        response = client.put(
            f"/api/records/{record['id']}",
            json={"date": "2030-01-01", "vitalSigns": [], "steps": 10},
            headers=auth_headers,
        )
        updated = response.get_json()["record"]
        assert updated["date"].startswith("2024-01-01")
        assert len(updated["vitalSigns"]) == 1
        assert updated["steps"] == 10


class TestDeleteRecord:
    def test_delete_cascades_vital_signs(self, client, auth_headers, create_record) -> None:
        record = create_record(vitalSigns=[morning(), morning(timeOfDay="night")])
        assert VitalSign.query.count() == 2

        response = client.delete(f"/api/records/{record['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()["message"] == "Record deleted successfully"
        assert db.session.get(HealthRecord, record["id"]) is None
        assert VitalSign.query.filter_by(record_id=record["id"]).count() == 0
        assert VitalSign.query.count() == 0

    def test_delete_missing(self, client, auth_headers) -> None:
        response = client.delete("/api/records/999", headers=auth_headers)
        assert response.status_code == 404
        assert response.get_json()["error"] == "Record not found"


class TestOwnership:
    def test_other_users_record_is_not_found(self, client, other_headers, create_record) -> None:
        record = create_record(weight=70)
        url = f"/api/records/{record['id']}"

        assert client.get(url, headers=other_headers).status_code == 404
        assert client.put(url, json={"weight": 90}, headers=other_headers).status_code == 404
        assert client.delete(url, headers=other_headers).status_code == 404

        stored = db.session.get(HealthRecord, record["id"])
        assert stored is not None
        assert stored.weight == 70

    def test_invalid_body_on_foreign_record_is_still_404(self, client, other_headers, create_record) -> None:
        record = create_record()
        response = client.put(f"/api/records/{record['id']}", json={"weight": -5}, headers=other_headers)
        assert response.status_code == 404

    def test_missing_record_is_404(self, client, auth_headers) -> None:
        response = client.get("/api/records/12345", headers=auth_headers)
        assert response.status_code == 404
        assert response.get_json()["error"] == "Record not found"
