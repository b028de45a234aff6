from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal

class ViolationBase(BaseModel):
    violation_type: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10, max_length=255)
    penalty_amount: Decimal = Field(..., ge=0, le=1000000)
    section_of_law: Optional[str] = Field(None, max_length=255)
    is_cognizable: bool = False

class ViolationCreate(ViolationBase):
    pass

class ViolationUpdate(BaseModel):
    violation_type: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, min_length=10, max_length=255)
    penalty_amount: Optional[Decimal] = Field(None, ge=0, le=1000000)
    section_of_law: Optional[str] = Field(None, max_length=255)
    is_cognizable: Optional[bool] = None

class ViolationResponse(ViolationBase):
    id: int
    total_challans: int = 0

    class Config:
        from_attributes = True
