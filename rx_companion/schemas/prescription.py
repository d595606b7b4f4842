import base64
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# placeholder for required fields the OCR service did not return
UNKNOWN = "unknown"

# decoded JSON straight from the OCR service, nothing validated yet
RawExtractionResult = Dict[str, Any]


class SourceImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes
    content_type: str
    filename: str = "prescription"

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"

    @property
    def size(self) -> int:
        return len(self.data)


class MedicineLine(BaseModel):
    name: str = UNKNOWN
    dosage_per_intake: str = ""
    daily_frequency: str = ""
    total_days: str = ""
    usage_instruction: Optional[str] = None
    effect: Optional[str] = None


class NormalizedPrescription(BaseModel):
    pharmacy_name: str = UNKNOWN
    dispensing_date: str = Field(..., description="ISO date, YYYY-MM-DD")
    patient_name: Optional[str] = None
    pharmacy_address: Optional[str] = None
    pharmacy_phone: Optional[str] = None
    prescribing_doctor: Optional[str] = None
    total_amount: Optional[float] = None
    copayment: Optional[float] = None
    medicines: List[MedicineLine] = Field(default_factory=list)
