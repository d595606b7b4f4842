# ============================================================================
# tests/test_streamlit_app.py
# ============================================================================
"""
Tests for the scanner tab of the Streamlit UI
"""

import base64
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from rx_companion.core.app_config import PRESCRIPTION_API_URL
from rx_companion.services.extraction_client import ExtractionClient
from rx_companion.services.prescription_pipeline import PrescriptionPipeline
from tests.fakes import FakeResponse, FakeSession, FakeUpload

APP_PATH = str(Path(__file__).resolve().parents[1] / "ui" / "streamlit_app.py")

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def previewing_pipeline():
    session = FakeSession(FakeResponse(200, {"medicines": [{"name": "타이레놀"}]}))
    pipeline = PrescriptionPipeline(client=ExtractionClient(base_url=PRESCRIPTION_API_URL, session=session))
    pipeline.load_image(FakeUpload(PNG_BYTES, type="image/png", name="rx.png"))
    assert pipeline.state.status == "PREVIEWING"
    return pipeline


@pytest.fixture
def app(previewing_pipeline):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["pipeline"] = previewing_pipeline
    return at.run()


class TestScannerPreview:
    """A retained photo that was never analysed still offers a way forward"""

    def test_preview_offers_analyse_and_rescan(self, app):
        assert not app.exception
        assert not app.button(key="scan_extract").disabled
        assert app.button(key="scan_reset").label == "다시 스캔"

    def test_rescan_returns_to_idle(self, app):
        app.button(key="scan_reset").click().run()

        assert not app.exception
        assert app.session_state["pipeline"].state.status == "IDLE"

    def test_analyse_runs_extraction(self, app):
        app.button(key="scan_extract").click().run()

        assert not app.exception
        state = app.session_state["pipeline"].state
        assert state.status == "SUCCEEDED"
        assert [m.name for m in state.result.medicines] == ["타이레놀"]
