from pydantic import BaseModel, Field
from typing import Optional

class PoliceStationBase(BaseModel):
    station_name: str = Field(..., min_length=1, max_length=100)
    station_code: str = Field(..., min_length=1, max_length=20)
    location: Optional[str] = Field(None, max_length=200)
    district: Optional[str] = Field(None, max_length=50)
    province: Optional[str] = Field(None, max_length=50)
    contact: Optional[str] = Field(None, max_length=15)

class PoliceStationCreate(PoliceStationBase):
    pass

class PoliceStationUpdate(BaseModel):
    station_name: Optional[str] = Field(None, min_length=1, max_length=100)
    station_code: Optional[str] = Field(None, min_length=1, max_length=20)
    location: Optional[str] = Field(None, max_length=200)
    district: Optional[str] = Field(None, max_length=50)
    province: Optional[str] = Field(None, max_length=50)
    contact: Optional[str] = Field(None, max_length=15)

class PoliceStationResponse(PoliceStationBase):
    id: int
    is_active: bool
    officer_count: int = 0

    class Config:
        from_attributes = True
