from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from rx_companion.schemas.models import Dose, DoseProgress, Medicine
from rx_companion.services.medicine_store import is_active
from rx_companion.services.planning import bucket_for_time
from rx_companion.utils.dates import today_local

def _dose_id(medicine_id: str, day: date, hhmm: str) -> str:
    # stable across reruns so a "taken" mark survives a list refresh
    return f"dose_{medicine_id}_{day.isoformat()}_{hhmm.replace(':', '')}"

class DoseTracker:
    """Today's doses, derived from the medicine list, plus which ones were taken."""

    def __init__(self):
        self._taken: Dict[str, Set[str]] = {}

    def today(self, medicines: Iterable[Medicine], day: Optional[date] = None) -> List[Dose]:
        day = day or today_local()
        taken = self._taken.get(day.isoformat(), set())
        doses: List[Dose] = []
        for m in medicines:
            if not is_active(m, day):
                continue
            for hhmm in m.times:
                dose_id = _dose_id(m.id, day, hhmm)
                doses.append(Dose(
                    dose_id=dose_id,
                    medicine_id=m.id,
                    med_name=m.name,
                    time_local=hhmm,
                    bucket=bucket_for_time(hhmm),
                    taken=dose_id in taken,
                ))
        doses.sort(key=lambda d: (d.time_local, d.med_name))
        return doses

    def mark_taken(self, dose_id: str, doses: List[Dose], day: Optional[date] = None) -> Dose:
        dose = next((d for d in doses if d.dose_id == dose_id), None)
        if dose is None:
            raise KeyError(dose_id)
        key = (day or today_local()).isoformat()
        # only one day's marks are ever read back; drop the rest
        for stale in [k for k in self._taken if k != key]:
            del self._taken[stale]
        self._taken.setdefault(key, set()).add(dose_id)
        return dose.model_copy(update={"taken": True})

    def progress(self, doses: List[Dose], day: Optional[date] = None) -> DoseProgress:
        day = day or today_local()
        total = len(doses)
        taken = sum(1 for d in doses if d.taken)
        return DoseProgress(
            date=day.isoformat(),
            taken=taken,
            total=total,
            remaining=total - taken,
            rate=round(taken / total, 3) if total else 0.0,
        )
