from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

class EmissionReportCreate(BaseModel):
    device_id: int
    co: Optional[Decimal] = Field(None, ge=0)
    co2: Optional[Decimal] = Field(None, ge=0)
    hc: Optional[Decimal] = Field(None, ge=0)
    nox: Optional[Decimal] = Field(None, ge=0)
    sound_level_dba: Decimal = Field(..., ge=0, le=200)
    test_datetime: datetime
    ml_classification: Optional[str] = Field(None, max_length=100)

class EmissionReportResponse(BaseModel):
    id: int
    device_id: int
    device_name: Optional[str] = None
    co: Optional[Decimal]
    co2: Optional[Decimal]
    hc: Optional[Decimal]
    nox: Optional[Decimal]
    sound_level_dba: Decimal
    test_datetime: datetime
    ml_classification: Optional[str]
    digital_signature_value: Optional[str]
    is_violation: bool
    has_challan: bool

    class Config:
        from_attributes = True

class EmissionReportVerification(BaseModel):
    emission_report_id: int
    is_authentic: bool
    digital_signature_match: bool
    data_integrity: str
    stored_signature: str
    computed_signature: str
    verified_at: datetime
    admissible_in_court: bool
    verification_message: str
