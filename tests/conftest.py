# ============================================================================
# tests/conftest.py
# ============================================================================
"""
Shared fixtures: fake uploads, sample OCR payloads, fixed dates.
"""

from datetime import date

import pytest
import requests

from tests.fakes import FakeUpload


@pytest.fixture
def today():
    return date(2026, 10, 19)


@pytest.fixture
def jpeg_bytes():
    return b"\xff\xd8\xff\xe0fake-jpeg-payload"


@pytest.fixture
def upload(jpeg_bytes):
    return FakeUpload(jpeg_bytes)


@pytest.fixture
def sample_payload():
    """A complete OCR service response."""
    return {
        "pharmacy": {"name": "행복약국", "address": "서울시 강남구 테헤란로 1", "phoneNumber": "02-111-2222"},
        "patient": {"name": "홍길동"},
        "dispensingDate": "2026-10-15",
        "prescribingDoctor": "김의사",
        "totalAmount": 15000,
        "copayment": 4500,
        "medicines": [
            {"name": "타이레놀", "dosagePerIntake": "1정", "dailyFrequency": "3회", "totalDays": "5",
             "usageInstruction": "식후 30분", "effect": "해열진통"},
            {"name": "뮤코펙트", "dosagePerIntake": "1정", "dailyFrequency": "1일 2회", "totalDays": "5일"},
            {"name": "위장약", "dailyFrequency": "1"},
        ],
    }


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
