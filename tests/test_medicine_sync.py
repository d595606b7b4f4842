# ============================================================================
# tests/test_medicine_sync.py
# ============================================================================
"""
Tests for saving a reviewed prescription to the API and the local list
"""

import pytest

from rx_companion.services.medicine_store import MedicineStore
from rx_companion.services.medicine_sync import NOTHING_TO_SAVE, save_scanned_prescription
from rx_companion.services.normalization import normalize_prescription
from tests.fakes import FakeResponse, FakeSession


@pytest.fixture
def record(sample_payload, today):
    return normalize_prescription(sample_payload, today=today)


@pytest.fixture
def local():
    return MedicineStore(seed=False)


class TestSaveScannedPrescription:

    def test_synced_when_api_accepts(self, record, local):
        session = FakeSession(FakeResponse(201, []))

        outcome = save_scanned_prescription(record, local, "http://api.local/", session=session)

        assert outcome.synced
        assert outcome.notice is None
        assert [m.name for m in outcome.added] == ["타이레놀", "뮤코펙트", "위장약"]
        assert len(local.list()) == 3
        assert session.calls[0]["url"] == "http://api.local/medicines/from-prescription"
        assert session.calls[0]["json"]["pharmacy_name"] == "행복약국"

    def test_unreachable_api_saves_locally(self, record, local, connection_error):
        outcome = save_scanned_prescription(record, local, "http://api.local", session=FakeSession(connection_error))

        assert not outcome.synced
        assert "unreachable" in outcome.notice
        assert len(local.list()) == 3

    def test_rejected_record_is_reported_as_rejection(self, record, local):
        session = FakeSession(FakeResponse(422, text="bad record"))

        outcome = save_scanned_prescription(record, local, "http://api.local", session=session)

        assert not outcome.synced
        assert "rejected" in outcome.notice
        assert "422" in outcome.notice
        assert len(local.list()) == 3

    def test_empty_medicine_list_is_not_posted(self, record, local):
        session = FakeSession()
        empty = record.model_copy(update={"medicines": []})

        outcome = save_scanned_prescription(empty, local, "http://api.local", session=session)

        assert session.calls == []
        assert outcome.added == []
        assert outcome.notice == NOTHING_TO_SAVE
        assert local.list() == []
