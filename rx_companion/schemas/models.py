from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

NotificationKind = Literal["medicine", "appointment"]
SupplementCategory = Literal["heart", "bone", "eye", "brain", "immunity"]
Bucket = Literal["MORNING", "AFTERNOON", "NIGHT"]

SAFETY_NOTE = (
    "Not medical advice. This app organizes medicines you entered or scanned. "
    "Always confirm instructions with a doctor/pharmacist."
)

class MedicineCreate(BaseModel):
    name: str = Field(..., min_length=1)
    dosage: str = ""
    frequency: str = ""
    times: List[str] = Field(default_factory=list, description="HH:MM reminder times")
    start_date: str
    end_date: Optional[str] = None
    hospital: str = ""
    notes: str = ""

class Medicine(MedicineCreate):
    id: str

class Dose(BaseModel):
    dose_id: str
    medicine_id: str
    med_name: str
    time_local: str  # "HH:MM"
    bucket: Bucket
    taken: bool = False

class DoseProgress(BaseModel):
    date: str
    taken: int
    total: int
    remaining: int
    rate: float

class Appointment(BaseModel):
    id: str
    hospital: str
    date: str
    days_left: Optional[int] = None

class GuardianCreate(BaseModel):
    name: str = Field(..., min_length=1)
    relationship: str = ""
    phone: str = ""
    email: str = ""
    notify_medicine: bool = True
    notify_appointment: bool = True
    notify_days_before: int = Field(default=3, ge=0, le=30)

class Guardian(GuardianCreate):
    id: str

class Supplement(BaseModel):
    id: int
    name: str
    category: SupplementCategory
    icon: str
    benefits: List[str]
    recommended: bool
    description: str
    dosage: str

class Pharmacy(BaseModel):
    id: int
    name: str
    address: str
    phone: str
    distance: str
    is_open: bool
    hours: str
    has_parking: bool
    is_24_hours: bool

class ToolResult(BaseModel):
    ok: bool
    mock: bool = True
    details: Dict[str, Any] = Field(default_factory=dict)
