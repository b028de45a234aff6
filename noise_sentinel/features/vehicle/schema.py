from pydantic import BaseModel, Field, field_validator
from typing import Optional
from noise_sentinel.core.validators import normalize_plate

PLATE_PATTERN = r"^[A-Z0-9-]+$"

class VehicleInput(BaseModel):
    plate_number: str = Field(..., min_length=3, max_length=50, pattern=PLATE_PATTERN)
    make: str = Field(..., min_length=1, max_length=50)
    color: Optional[str] = Field(None, max_length=30)
    chassis_no: Optional[str] = Field(None, max_length=50)
    engine_no: Optional[str] = Field(None, max_length=50)
    registration_year: Optional[int] = Field(None, ge=1900)

    @field_validator("plate_number", mode="before")
    @classmethod
    def _normalize_plate(cls, v):
        return normalize_plate(v) if isinstance(v, str) else v

class VehicleCreate(VehicleInput):
    owner_id: Optional[int] = None

class VehicleUpdate(BaseModel):
    plate_number: Optional[str] = Field(None, min_length=3, max_length=50, pattern=PLATE_PATTERN)
    make: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, max_length=30)
    chassis_no: Optional[str] = Field(None, max_length=50)
    engine_no: Optional[str] = Field(None, max_length=50)
    registration_year: Optional[int] = Field(None, ge=1900)
    owner_id: Optional[int] = None

    @field_validator("plate_number", mode="before")
    @classmethod
    def _normalize_plate(cls, v):
        return normalize_plate(v) if isinstance(v, str) else v

class VehicleResponse(BaseModel):
    id: int
    plate_number: str
    make: Optional[str]
    color: Optional[str]
    chassis_no: Optional[str]
    engine_no: Optional[str]
    registration_year: Optional[int]
    owner_id: Optional[int]
    owner_name: Optional[str] = None
    owner_cnic: Optional[str] = None
    total_challans: int = 0

    class Config:
        from_attributes = True
