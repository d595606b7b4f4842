# ============================================================================
# tests/test_api.py
# ============================================================================
"""
Tests for the companion FastAPI routes
"""

import pytest
from fastapi.testclient import TestClient

from rx_companion.api.deps import get_dose_tracker, get_guardian_store, get_medicine_store
from rx_companion.main import app
from rx_companion.services.dose_tracker import DoseTracker
from rx_companion.services.guardian_store import GuardianStore
from rx_companion.services.medicine_store import MedicineStore
from rx_companion.services.normalization import normalize_prescription


@pytest.fixture
def stores():
    medicines = MedicineStore()
    guardians = GuardianStore()
    tracker = DoseTracker()
    app.dependency_overrides[get_medicine_store] = lambda: medicines
    app.dependency_overrides[get_guardian_store] = lambda: guardians
    app.dependency_overrides[get_dose_tracker] = lambda: tracker
    yield medicines, guardians, tracker
    app.dependency_overrides.clear()


@pytest.fixture
def client(stores):
    return TestClient(app)


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"ok": True}


class TestMedicines:

    def test_list_seeded(self, client):
        body = client.get("/medicines").json()

        assert len(body) == 2
        assert body[0]["days_remaining"] == 12

    def test_add_and_delete(self, client):
        created = client.post("/medicines", json={
            "name": "소화제", "times": ["20:00"], "start_date": "2026-10-01",
        })
        assert created.status_code == 201
        med_id = created.json()["id"]

        assert client.get(f"/medicines/{med_id}").json()["name"] == "소화제"
        assert client.delete(f"/medicines/{med_id}").status_code == 204
        assert client.get(f"/medicines/{med_id}").status_code == 404
        assert client.delete(f"/medicines/{med_id}").status_code == 404

    def test_add_requires_name(self, client):
        assert client.post("/medicines", json={"name": "", "start_date": "2026-10-01"}).status_code == 422

    def test_from_prescription(self, client, sample_payload, today):
        prescription = normalize_prescription(sample_payload, today=today)

        r = client.post("/medicines/from-prescription", json=prescription.model_dump())

        assert r.status_code == 201
        assert [m["name"] for m in r.json()] == ["타이레놀", "뮤코펙트", "위장약"]
        assert len(client.get("/medicines").json()) == 5

    def test_from_prescription_without_medicines(self, client, today):
        prescription = normalize_prescription({}, today=today)

        r = client.post("/medicines/from-prescription", json=prescription.model_dump())

        assert r.status_code == 400


class TestDoses:

    def test_today_and_taken(self, client):
        doses = client.get("/doses/today").json()
        assert len(doses) == 3
        assert not any(d["taken"] for d in doses)

        r = client.post(f"/doses/{doses[0]['dose_id']}/taken")
        assert r.status_code == 200
        assert r.json()["taken"] is True

        progress = client.get("/doses/progress").json()
        assert progress["taken"] == 1
        assert progress["total"] == 3

    def test_taken_unknown_dose(self, client):
        assert client.post("/doses/dose_nope/taken").status_code == 404

    def test_missed_dose_alerts_guardians(self, client):
        dose_id = client.get("/doses/today").json()[0]["dose_id"]

        r = client.post(f"/doses/{dose_id}/missed")

        assert r.status_code == 200
        alerts = r.json()
        assert len(alerts) == 1
        assert alerts[0]["details"]["reason"] == "MISSED_DOSE"

    def test_missed_after_taken_conflicts(self, client):
        dose_id = client.get("/doses/today").json()[0]["dose_id"]
        client.post(f"/doses/{dose_id}/taken")

        assert client.post(f"/doses/{dose_id}/missed").status_code == 409


class TestGuardians:

    def test_add_toggle_delete(self, client):
        created = client.post("/guardians", json={"name": "이웃", "phone": "010-0000-0000"}).json()

        toggled = client.post(f"/guardians/{created['id']}/toggle", params={"kind": "medicine"}).json()
        assert toggled["notify_medicine"] is False

        assert client.delete(f"/guardians/{created['id']}").status_code == 204
        assert len(client.get("/guardians").json()) == 2

    def test_toggle_bad_kind(self, client):
        gid = client.get("/guardians").json()[0]["id"]
        assert client.post(f"/guardians/{gid}/toggle", params={"kind": "sms"}).status_code == 422

    def test_toggle_unknown(self, client):
        assert client.post("/guardians/grd_nope/toggle", params={"kind": "medicine"}).status_code == 404


class TestCatalog:

    def test_supplements(self, client):
        assert len(client.get("/supplements").json()) == 8
        assert len(client.get("/supplements", params={"category": "immunity"}).json()) == 2
        assert len(client.get("/supplements", params={"recommended_only": True}).json()) == 4

    def test_pharmacies(self, client):
        assert [p["name"] for p in client.get("/pharmacies", params={"q": "우리"}).json()] == ["우리약국"]

    def test_appointment_notify(self, client):
        alerts = client.post("/appointments/notify").json()

        # seeded guardians: 3 and 5 days before; appointments are 5 and 12 days out
        assert len(alerts) == 1
        assert alerts[0]["details"]["days_left"] == 5
