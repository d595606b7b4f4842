import json
import logging
import os
from typing import Any, Optional

import requests

from rx_companion.core.app_config import DEFAULT_PRESCRIPTION_API_URL, PRESCRIPTION_API_TIMEOUT_S
from rx_companion.core.errors import NetworkError, ParseError, ServiceError
from rx_companion.schemas.prescription import RawExtractionResult, SourceImage

logger = logging.getLogger(__name__)

EXTRACT_PATH = "/api/prescription/extract"


def _parse_object(text: str) -> RawExtractionResult:
    """Decode the response body; only a JSON object is a usable result."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ParseError(f"Invalid JSON from OCR service: {(text or '')[:200]}") from e
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object from OCR service, got {type(data).__name__}.")
    return data


class ExtractionClient:
    """
    Calls the OCR/structuring service: POST {base}/api/prescription/extract
    with the photo as a single multipart `image` field.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[Any] = None,
        timeout_s: Optional[float] = None,
    ):
        # read at construction time so a changed config.env is picked up on rerun
        base = base_url or os.getenv("PRESCRIPTION_API_URL", "").strip() or DEFAULT_PRESCRIPTION_API_URL
        self.base_url = base.rstrip("/")
        self.session = session or requests.Session()
        self.timeout_s = timeout_s if timeout_s is not None else PRESCRIPTION_API_TIMEOUT_S

    @property
    def url(self) -> str:
        return f"{self.base_url}{EXTRACT_PATH}"

    def extract(self, image: SourceImage) -> RawExtractionResult:
        # fresh request body on every call, retries included
        files = {"image": (image.filename, image.data, image.content_type)}

        try:
            r = self.session.post(self.url, files=files, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise NetworkError(f"Could not reach the prescription service: {e}") from e

        if not 200 <= r.status_code < 300:
            logger.warning("OCR service answered %s", r.status_code)
            raise ServiceError(r.status_code)

        return _parse_object(r.text)
