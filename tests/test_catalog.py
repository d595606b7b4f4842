# ============================================================================
# tests/test_catalog.py
# ============================================================================
"""
Tests for supplement / pharmacy lookups and mock guardian alerts
"""

from rx_companion.schemas.models import Appointment, GuardianCreate
from rx_companion.services import catalog
from rx_companion.services.guardian_store import GuardianStore
from rx_companion.services.tools import appointment_alerts, notify_guardians


class TestSupplements:

    def test_all(self):
        assert len(catalog.filter_by_category("all")) == 8

    def test_by_category(self):
        names = [s.name for s in catalog.filter_by_category("bone")]
        assert names == ["칼슘 + 비타민D", "글루코사민"]

    def test_unknown_category_is_empty(self):
        assert catalog.filter_by_category("teeth") == []

    def test_recommended(self):
        assert {s.id for s in catalog.recommended()} == {1, 2, 3, 7}


class TestPharmacies:

    def test_empty_query_returns_all(self):
        assert len(catalog.search_pharmacies("")) == 4
        assert len(catalog.search_pharmacies(None)) == 4

    def test_search_by_name(self):
        assert [p.name for p in catalog.search_pharmacies("24시")] == ["24시 중앙약국"]

    def test_search_by_address(self):
        assert [p.name for p in catalog.search_pharmacies("논현동")] == ["건강약국"]

    def test_no_match(self):
        assert catalog.search_pharmacies("부산") == []


class TestAlerts:

    def test_upcoming_appointments_days_left(self, today):
        appts = catalog.upcoming_appointments(today)
        assert [a.days_left for a in appts] == [5, 12]
        assert appts[0].date == "2026-10-24"

    def test_notify_guardians_only_subscribed(self):
        results = notify_guardians(GuardianStore(), "medicine", {"reason": "MISSED_DOSE"})

        assert len(results) == 1
        assert results[0].mock and results[0].ok
        assert results[0].details["reason"] == "MISSED_DOSE"
        assert results[0].details["channel"] == "sms"

    def test_appointment_alerts_respect_days_before(self):
        store = GuardianStore(seed=False)
        store.add(GuardianCreate(name="A", notify_days_before=3))
        store.add(GuardianCreate(name="B", notify_days_before=7))
        store.add(GuardianCreate(name="C", notify_days_before=30, notify_appointment=False))
        appts = [
            Appointment(id="apt_1", hospital="내과", date="2026-10-24", days_left=5),
            Appointment(id="apt_2", hospital="안과", date="2026-10-21", days_left=2),
        ]

        results = appointment_alerts(store, appts)

        pairs = sorted((r.details["appointment_id"], r.details["kind"]) for r in results)
        assert len(results) == 3
        assert pairs == [("apt_1", "appointment"), ("apt_2", "appointment"), ("apt_2", "appointment")]
