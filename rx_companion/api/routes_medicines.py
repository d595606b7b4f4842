from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from rx_companion.api.deps import get_medicine_store
from rx_companion.schemas.models import Medicine, MedicineCreate
from rx_companion.schemas.prescription import NormalizedPrescription
from rx_companion.services.medicine_store import MedicineStore, days_remaining

router = APIRouter(prefix="/medicines", tags=["medicines"])

class MedicineOut(Medicine):
    days_remaining: Optional[int] = None

def _out(m: Medicine) -> MedicineOut:
    return MedicineOut(**m.model_dump(), days_remaining=days_remaining(m))

@router.get("", response_model=List[MedicineOut])
def list_medicines(store: MedicineStore = Depends(get_medicine_store)):
    return [_out(m) for m in store.list()]

@router.post("", response_model=MedicineOut, status_code=201)
def add_medicine(req: MedicineCreate, store: MedicineStore = Depends(get_medicine_store)):
    return _out(store.add(req))

@router.post("/from-prescription", response_model=List[MedicineOut], status_code=201)
def add_from_prescription(req: NormalizedPrescription, store: MedicineStore = Depends(get_medicine_store)):
    if not req.medicines:
        raise HTTPException(status_code=400, detail="Prescription has no medicines to add.")
    return [_out(m) for m in store.add_from_prescription(req)]

@router.get("/{medicine_id}", response_model=MedicineOut)
def get_medicine(medicine_id: str, store: MedicineStore = Depends(get_medicine_store)):
    try:
        return _out(store.get(medicine_id))
    except KeyError:
        raise HTTPException(status_code=404, detail="medicine_id not found")

@router.delete("/{medicine_id}", status_code=204)
def delete_medicine(medicine_id: str, store: MedicineStore = Depends(get_medicine_store)):
    try:
        store.delete(medicine_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="medicine_id not found")
