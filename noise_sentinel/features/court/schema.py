from pydantic import BaseModel, Field
from typing import Optional

class CourtTypeResponse(BaseModel):
    id: int
    court_type_name: str

    class Config:
        from_attributes = True

class CourtBase(BaseModel):
    court_name: str = Field(..., min_length=1, max_length=100)
    court_type_id: int
    location: Optional[str] = Field(None, max_length=200)
    district: Optional[str] = Field(None, max_length=50)
    province: Optional[str] = Field(None, max_length=50)

class CourtCreate(CourtBase):
    pass

class CourtUpdate(BaseModel):
    court_name: Optional[str] = Field(None, min_length=1, max_length=100)
    court_type_id: Optional[int] = None
    location: Optional[str] = Field(None, max_length=200)
    district: Optional[str] = Field(None, max_length=50)
    province: Optional[str] = Field(None, max_length=50)

class CourtResponse(CourtBase):
    id: int
    court_type_name: Optional[str] = None
    judge_count: int = 0

    class Config:
        from_attributes = True
