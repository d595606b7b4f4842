from typing import List, Optional
from fastapi import APIRouter, Depends
from rx_companion.api.deps import get_guardian_store
from rx_companion.schemas.models import Appointment, Pharmacy, Supplement, ToolResult
from rx_companion.services import catalog
from rx_companion.services.guardian_store import GuardianStore
from rx_companion.services.tools import appointment_alerts

router = APIRouter(tags=["catalog"])

@router.get("/supplements", response_model=List[Supplement])
def supplements(category: str = "all", recommended_only: bool = False):
    if recommended_only:
        return catalog.recommended()
    return catalog.filter_by_category(category)

@router.get("/supplements/categories")
def supplement_categories():
    return catalog.CATEGORIES

@router.get("/pharmacies", response_model=List[Pharmacy])
def pharmacies(q: Optional[str] = None):
    return catalog.search_pharmacies(q)

@router.get("/appointments", response_model=List[Appointment])
def appointments():
    return catalog.upcoming_appointments()

@router.post("/appointments/notify", response_model=List[ToolResult])
def notify_appointments(store: GuardianStore = Depends(get_guardian_store)):
    return appointment_alerts(store, catalog.upcoming_appointments())
