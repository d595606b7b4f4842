from typing import List
from fastapi import APIRouter, Depends, HTTPException
from rx_companion.api.deps import get_dose_tracker, get_guardian_store, get_medicine_store
from rx_companion.schemas.models import Dose, DoseProgress, ToolResult
from rx_companion.services.dose_tracker import DoseTracker
from rx_companion.services.guardian_store import GuardianStore
from rx_companion.services.medicine_store import MedicineStore
from rx_companion.services.tools import notify_guardians

router = APIRouter(prefix="/doses", tags=["doses"])

@router.get("/today", response_model=List[Dose])
def today(
    medicines: MedicineStore = Depends(get_medicine_store),
    tracker: DoseTracker = Depends(get_dose_tracker),
):
    return tracker.today(medicines.list())

@router.get("/progress", response_model=DoseProgress)
def progress(
    medicines: MedicineStore = Depends(get_medicine_store),
    tracker: DoseTracker = Depends(get_dose_tracker),
):
    return tracker.progress(tracker.today(medicines.list()))

@router.post("/{dose_id}/taken", response_model=Dose)
def mark_taken(
    dose_id: str,
    medicines: MedicineStore = Depends(get_medicine_store),
    tracker: DoseTracker = Depends(get_dose_tracker),
):
    try:
        return tracker.mark_taken(dose_id, tracker.today(medicines.list()))
    except KeyError:
        raise HTTPException(status_code=404, detail="dose_id not found in today's doses")

@router.post("/{dose_id}/missed", response_model=List[ToolResult])
def mark_missed(
    dose_id: str,
    medicines: MedicineStore = Depends(get_medicine_store),
    tracker: DoseTracker = Depends(get_dose_tracker),
    guardians: GuardianStore = Depends(get_guardian_store),
):
    dose = next((d for d in tracker.today(medicines.list()) if d.dose_id == dose_id), None)
    if not dose:
        raise HTTPException(status_code=404, detail="dose_id not found in today's doses")
    if dose.taken:
        raise HTTPException(status_code=409, detail="dose already marked as taken")

    # missed dose escalation (mock): guardians subscribed to medicine alerts
    return notify_guardians(guardians, "medicine", {
        "reason": "MISSED_DOSE",
        "dose_id": dose.dose_id,
        "med_name": dose.med_name,
        "time_local": dose.time_local,
    })
