# rx_companion/services/medicine_sync.py
"""
Saving a reviewed prescription from the scanner screen.

The session's MedicineStore is what the screens render, so saved medicines
always land there. The companion API gets the same record when it answers.
"""
import logging
from typing import Any, List, Optional

import requests
from pydantic import BaseModel, Field

from rx_companion.schemas.models import Medicine
from rx_companion.schemas.prescription import NormalizedPrescription
from rx_companion.services.medicine_store import MedicineStore

logger = logging.getLogger(__name__)

NOTHING_TO_SAVE = "No medicines to save. Add at least one row first."


class SaveOutcome(BaseModel):
    added: List[Medicine] = Field(default_factory=list)
    synced: bool = False
    notice: Optional[str] = None


def save_scanned_prescription(
    record: NormalizedPrescription,
    local: MedicineStore,
    api_base: str,
    session: Optional[Any] = None,
    timeout: float = 20,
) -> SaveOutcome:
    if not record.medicines:
        return SaveOutcome(notice=NOTHING_TO_SAVE)

    http = session or requests
    url = f"{api_base.rstrip('/')}/medicines/from-prescription"
    notice = None
    try:
        r = http.post(url, json=record.model_dump(), timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Companion API unreachable at %s: %s", url, e)
        notice = "Companion API unreachable; saved on this device only."
    else:
        if r.status_code >= 400:
            logger.warning("Companion API rejected prescription: %s %s", r.status_code, r.text)
            notice = f"Companion API rejected the record ({r.status_code}); saved on this device only."

    added = local.add_from_prescription(record)
    return SaveOutcome(added=added, synced=notice is None, notice=notice)
