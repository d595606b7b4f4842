from typing import List
from fastapi import APIRouter, Depends, HTTPException
from rx_companion.api.deps import get_guardian_store
from rx_companion.schemas.models import Guardian, GuardianCreate, NotificationKind
from rx_companion.services.guardian_store import GuardianStore

router = APIRouter(prefix="/guardians", tags=["guardians"])

@router.get("", response_model=List[Guardian])
def list_guardians(store: GuardianStore = Depends(get_guardian_store)):
    return store.list()

@router.post("", response_model=Guardian, status_code=201)
def add_guardian(req: GuardianCreate, store: GuardianStore = Depends(get_guardian_store)):
    return store.add(req)

@router.post("/{guardian_id}/toggle", response_model=Guardian)
def toggle_notification(guardian_id: str, kind: NotificationKind, store: GuardianStore = Depends(get_guardian_store)):
    try:
        return store.toggle(guardian_id, kind)
    except KeyError:
        raise HTTPException(status_code=404, detail="guardian_id not found")

@router.delete("/{guardian_id}", status_code=204)
def delete_guardian(guardian_id: str, store: GuardianStore = Depends(get_guardian_store)):
    try:
        store.delete(guardian_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="guardian_id not found")
