import os
from typing import Optional

from rx_companion.core.env import load_env

load_env()

DEFAULT_PRESCRIPTION_API_URL = "http://localhost:7080"

PRESCRIPTION_API_URL = os.getenv("PRESCRIPTION_API_URL", DEFAULT_PRESCRIPTION_API_URL)
COMPANION_API_URL = os.getenv("COMPANION_API_URL", "http://127.0.0.1:8000")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "Asia/Seoul")


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return float(raw)


# unset -> no timeout of our own, the transport default applies
PRESCRIPTION_API_TIMEOUT_S = _optional_float("PRESCRIPTION_API_TIMEOUT_S")
