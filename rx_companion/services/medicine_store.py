import logging
import uuid
from datetime import date
from typing import Dict, List, Optional

from rx_companion.schemas.models import Medicine, MedicineCreate
from rx_companion.schemas.prescription import UNKNOWN, NormalizedPrescription
from rx_companion.services.planning import parse_days, suggest_times
from rx_companion.utils.dates import add_days, days_until, parse_iso_date, today_local

logger = logging.getLogger(__name__)

def seed_medicines(today: date) -> List[MedicineCreate]:
    start = add_days(today, -18).isoformat()
    end = add_days(today, 12).isoformat()
    return [
        MedicineCreate(
            name="혈압약 (암로디핀)",
            dosage="5mg",
            frequency="하루 1회",
            times=["08:00"],
            start_date=start,
            end_date=end,
            hospital="서울대병원 내과",
            notes="아침 식후 복용",
        ),
        MedicineCreate(
            name="당뇨약 (메트포민)",
            dosage="500mg",
            frequency="하루 2회",
            times=["08:00", "20:00"],
            start_date=start,
            end_date=end,
            hospital="서울대병원 내과",
            notes="식후 30분 이내 복용",
        ),
    ]

def _medicine_id() -> str:
    return "med_" + uuid.uuid4().hex[:10]

def days_remaining(medicine: Medicine, today: Optional[date] = None) -> Optional[int]:
    return days_until(medicine.end_date, today or today_local())

def is_active(medicine: Medicine, today: date) -> bool:
    start = parse_iso_date(medicine.start_date)
    end = parse_iso_date(medicine.end_date)
    if start and today < start:
        return False
    if end and today > end:
        return False
    return True

def medicine_from_line(prescription: NormalizedPrescription, line) -> MedicineCreate:
    start = parse_iso_date(prescription.dispensing_date) or today_local()
    days = parse_days(line.total_days)
    notes = " / ".join(x for x in (line.usage_instruction, line.effect) if x)
    hospital = prescription.pharmacy_name if prescription.pharmacy_name != UNKNOWN else ""

    return MedicineCreate(
        name=line.name,
        dosage=line.dosage_per_intake,
        frequency=line.daily_frequency,
        times=suggest_times(line.daily_frequency),
        start_date=start.isoformat(),
        # the dispensing day counts as day 1
        end_date=add_days(start, days - 1).isoformat() if days else None,
        hospital=hospital,
        notes=notes,
    )

class MedicineStore:
    """In-memory medicine list. Owns id assignment for everything added to it."""

    def __init__(self, seed: bool = True):
        self._items: Dict[str, Medicine] = {}
        if seed:
            for m in seed_medicines(today_local()):
                self.add(m)

    def list(self) -> List[Medicine]:
        return list(self._items.values())

    def get(self, medicine_id: str) -> Medicine:
        return self._items[medicine_id]

    def add(self, data: MedicineCreate) -> Medicine:
        med = Medicine(id=_medicine_id(), **data.model_dump())
        self._items[med.id] = med
        return med

    def delete(self, medicine_id: str) -> None:
        del self._items[medicine_id]

    def add_from_prescription(self, prescription: NormalizedPrescription) -> List[Medicine]:
        added = [self.add(medicine_from_line(prescription, line)) for line in prescription.medicines]
        logger.info("Added %d medicine(s) from a scanned prescription.", len(added))
        return added
