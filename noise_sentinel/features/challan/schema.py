from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from noise_sentinel.models.enums import ChallanStatus
from noise_sentinel.features.vehicle.schema import VehicleInput
from noise_sentinel.features.accused.schema import AccusedInput
from noise_sentinel.core.validators import validate_cnic, normalize_plate

class ChallanCreate(BaseModel):
    """One request carrying either existing ids or new vehicle/accused details"""
    violation_id: int
    emission_report_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    vehicle_input: Optional[VehicleInput] = None
    accused_id: Optional[int] = None
    accused_input: Optional[AccusedInput] = None
    # base64 image, data URL prefix allowed
    evidence_path: Optional[str] = None
    bank_details: Optional[str] = Field(None, max_length=200)

class ChallanGuidedCreate(BaseModel):
    """Plate and CNIC lookups; new details only needed when the lookup misses"""
    violation_id: int
    emission_report_id: Optional[int] = None
    plate_number: str = Field(..., min_length=3, max_length=50)
    vehicle_input: Optional[VehicleInput] = None
    cnic: str
    accused_input: Optional[AccusedInput] = None
    evidence_path: Optional[str] = None
    bank_details: Optional[str] = Field(None, max_length=200)

class ChallanDispute(BaseModel):
    reason: str = Field(..., min_length=5, max_length=1000)

class PublicChallanSearch(BaseModel):
    plate_number: str = Field(..., min_length=3, max_length=50)
    cnic: str

    @field_validator("plate_number")
    @classmethod
    def _normalize_plate(cls, v):
        return normalize_plate(v)

    @field_validator("cnic")
    @classmethod
    def _check_cnic(cls, v):
        return validate_cnic(v)

class ChallanListItem(BaseModel):
    id: int
    officer_name: Optional[str] = None
    accused_name: Optional[str] = None
    vehicle_plate_number: Optional[str] = None
    violation_type: Optional[str] = None
    penalty_amount: Optional[Decimal] = None
    issue_datetime: datetime
    due_datetime: datetime
    status: ChallanStatus
    is_overdue: bool
    has_fir: bool

    class Config:
        from_attributes = True

class ChallanResponse(BaseModel):
    id: int
    officer_id: int
    officer_name: Optional[str] = None
    officer_badge_number: Optional[str] = None
    station_id: Optional[int] = None
    station_name: Optional[str] = None
    accused_id: int
    accused_name: Optional[str] = None
    accused_cnic: Optional[str] = None
    accused_contact: Optional[str] = None
    vehicle_id: int
    vehicle_plate_number: Optional[str] = None
    vehicle_make: Optional[str] = None
    vehicle_color: Optional[str] = None
    violation_id: int
    violation_type: Optional[str] = None
    penalty_amount: Optional[Decimal] = None
    is_cognizable: bool
    emission_report_id: Optional[int] = None
    device_name: Optional[str] = None
    sound_level_dba: Optional[Decimal] = None
    ml_classification: Optional[str] = None
    emission_test_datetime: Optional[datetime] = None
    evidence_image: Optional[str] = None
    issue_datetime: datetime
    due_datetime: datetime
    days_until_due: int
    status: ChallanStatus
    bank_details: Optional[str] = None
    digital_signature_value: Optional[str] = None
    paid_at: Optional[datetime] = None
    disputed_at: Optional[datetime] = None
    dispute_reason: Optional[str] = None
    is_overdue: bool
    has_fir: bool
    fir_id: Optional[int] = None

    class Config:
        from_attributes = True

class ChallanCreatedResponse(BaseModel):
    message: str
    challan: ChallanResponse

class OverdueSweepResponse(BaseModel):
    updated: int
