from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from noise_sentinel.models.enums import FirStatus

class FirCreate(BaseModel):
    challan_id: int
    fir_description: str = Field(..., min_length=20, max_length=500)
    investigation_report: Optional[str] = Field(None, max_length=500)

class FirUpdate(BaseModel):
    fir_status: FirStatus
    investigation_report: Optional[str] = Field(None, max_length=500)

class FirResponse(BaseModel):
    id: int
    fir_no: str
    station_id: int
    station_name: Optional[str] = None
    challan_id: int
    informant_id: Optional[int]
    informant_name: Optional[str] = None
    accused_name: Optional[str] = None
    vehicle_plate_number: Optional[str] = None
    violation_type: Optional[str] = None
    date_filed: datetime
    fir_description: Optional[str]
    fir_status: FirStatus
    investigation_report: Optional[str]
    has_case: bool
    case_id: Optional[int] = None

    class Config:
        from_attributes = True
