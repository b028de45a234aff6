from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from noise_sentinel.models.enums import CaseStatus

class CaseCreate(BaseModel):
    fir_id: int
    judge_id: int
    case_type: Optional[str] = Field("Traffic Violation", max_length=50)
    hearing_date: Optional[datetime] = None

class CaseUpdate(BaseModel):
    case_status: Optional[CaseStatus] = None
    hearing_date: Optional[datetime] = None
    verdict: Optional[str] = Field(None, max_length=255)

class AssignJudge(BaseModel):
    judge_id: int

class CaseListItem(BaseModel):
    id: int
    case_no: str
    fir_no: Optional[str] = None
    accused_name: Optional[str] = None
    judge_name: Optional[str] = None
    case_status: CaseStatus
    hearing_date: Optional[datetime]

    class Config:
        from_attributes = True

class CaseResponse(BaseModel):
    id: int
    case_no: str
    fir_id: int
    fir_no: Optional[str] = None
    challan_id: Optional[int] = None
    accused_name: Optional[str] = None
    vehicle_plate_number: Optional[str] = None
    violation_type: Optional[str] = None
    judge_id: Optional[int]
    judge_name: Optional[str] = None
    court_id: Optional[int] = None
    court_name: Optional[str] = None
    case_type: Optional[str]
    case_status: CaseStatus
    hearing_date: Optional[datetime]
    verdict: Optional[str]
    statement_count: int

    class Config:
        from_attributes = True
