from pydantic import BaseModel, Field, field_validator
from typing import Optional
from noise_sentinel.core.validators import validate_cnic

CONTACT_PATTERN = r"^[\d\s\-\+\(\)]+$"

class AccusedInput(BaseModel):
    full_name: str = Field(..., min_length=3, max_length=100)
    cnic: str
    city: Optional[str] = Field(None, max_length=50)
    province: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=200)
    contact: Optional[str] = Field(None, min_length=10, max_length=20, pattern=CONTACT_PATTERN)

    @field_validator("cnic")
    @classmethod
    def _check_cnic(cls, v):
        return validate_cnic(v)

class AccusedCreate(AccusedInput):
    pass

class AccusedUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=3, max_length=100)
    cnic: Optional[str] = None
    city: Optional[str] = Field(None, max_length=50)
    province: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=200)
    contact: Optional[str] = Field(None, min_length=10, max_length=20, pattern=CONTACT_PATTERN)

    @field_validator("cnic")
    @classmethod
    def _check_cnic(cls, v):
        return validate_cnic(v)

class AccusedResponse(BaseModel):
    id: int
    full_name: str
    cnic: str
    city: Optional[str]
    province: Optional[str]
    address: Optional[str]
    contact: Optional[str]
    total_challans: int = 0
    total_vehicles: int = 0

    class Config:
        from_attributes = True
