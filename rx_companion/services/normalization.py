# rx_companion/services/normalization.py
"""
Maps the loosely-typed OCR response into a NormalizedPrescription.

Every field is decoded on its own and falls back to its default when the
service left it out, sent null, sent an empty string or sent the wrong type.
Nothing in here raises for a dict input and nothing touches the network.
"""
import math
from datetime import date
from typing import Any, Dict, List, Optional

from rx_companion.utils.dates import today_local
from rx_companion.schemas.prescription import (
    UNKNOWN,
    MedicineLine,
    NormalizedPrescription,
    RawExtractionResult,
)


def _obj(v: Any) -> Dict[str, Any]:
    return v if isinstance(v, dict) else {}


def _finite(v: Any) -> bool:
    # json ints are unbounded; anything past float range counts as garbage
    try:
        return math.isfinite(v)
    except OverflowError:
        return False


def _text(v: Any) -> Optional[str]:
    if isinstance(v, bool) or v is None:
        return None
    if isinstance(v, (int, float)):
        # e.g. totalDays: 7
        return str(v) if _finite(v) else None
    if not isinstance(v, str):
        return None
    v = v.strip()
    return v or None


def _number(v: Any) -> Optional[float]:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    return v if _finite(v) else None


def normalize_medicine(raw: Any) -> MedicineLine:
    m = _obj(raw)
    return MedicineLine(
        name=_text(m.get("name")) or UNKNOWN,
        dosage_per_intake=_text(m.get("dosagePerIntake")) or "",
        daily_frequency=_text(m.get("dailyFrequency")) or "",
        total_days=_text(m.get("totalDays")) or "",
        usage_instruction=_text(m.get("usageInstruction")),
        effect=_text(m.get("effect")),
    )


def normalize_medicines(raw: Any) -> List[MedicineLine]:
    if not isinstance(raw, list):
        return []
    # service order is kept; no sorting, no de-duplication
    return [normalize_medicine(m) for m in raw]


def normalize_prescription(raw: RawExtractionResult, today: Optional[date] = None) -> NormalizedPrescription:
    data = _obj(raw)
    pharmacy = _obj(data.get("pharmacy"))
    patient = _obj(data.get("patient"))

    dispensing_date = _text(data.get("dispensingDate"))
    if dispensing_date is None:
        dispensing_date = (today or today_local()).isoformat()

    return NormalizedPrescription(
        pharmacy_name=_text(pharmacy.get("name")) or UNKNOWN,
        dispensing_date=dispensing_date,
        patient_name=_text(patient.get("name")),
        pharmacy_address=_text(pharmacy.get("address")),
        pharmacy_phone=_text(pharmacy.get("phoneNumber")),
        prescribing_doctor=_text(data.get("prescribingDoctor")),
        total_amount=_number(data.get("totalAmount")),
        copayment=_number(data.get("copayment")),
        medicines=normalize_medicines(data.get("medicines")),
    )
