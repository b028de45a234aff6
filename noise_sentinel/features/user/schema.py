from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from noise_sentinel.core.validators import validate_cnic

class Token(BaseModel):
    access_token: str
    token_type: str
    user_id: int
    username: str
    full_name: str
    role: str
    expires_at: datetime

class UserBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)

class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=100)

class JudgeCreate(UserCreate):
    court_id: int
    cnic: Optional[str] = None
    contact_no: Optional[str] = Field(None, max_length=15)
    rank: Optional[str] = Field(None, max_length=50)
    service_status: bool = True

    @field_validator("cnic")
    @classmethod
    def _check_cnic(cls, v):
        return validate_cnic(v)

class PoliceOfficerCreate(UserCreate):
    station_id: int
    cnic: Optional[str] = None
    contact_no: Optional[str] = Field(None, max_length=15)
    badge_number: Optional[str] = Field(None, max_length=20)
    rank: Optional[str] = Field(None, max_length=50)
    is_investigation_officer: bool = False
    posting_date: Optional[datetime] = None

    @field_validator("cnic")
    @classmethod
    def _check_cnic(cls, v):
        return validate_cnic(v)

class ChangePassword(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6, max_length=100)

class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    # officer / judge profile
    station_id: Optional[int] = None
    court_id: Optional[int] = None
    cnic: Optional[str] = None
    contact_no: Optional[str] = Field(None, max_length=15)
    badge_number: Optional[str] = Field(None, max_length=20)
    rank: Optional[str] = Field(None, max_length=50)
    is_investigation_officer: Optional[bool] = None
    service_status: Optional[bool] = None

    @field_validator("cnic")
    @classmethod
    def _check_cnic(cls, v):
        return validate_cnic(v)

class PoliceOfficerProfile(BaseModel):
    id: int
    station_id: Optional[int]
    cnic: Optional[str]
    contact_no: Optional[str]
    badge_number: Optional[str]
    rank: Optional[str]
    is_investigation_officer: bool
    posting_date: Optional[datetime]

    class Config:
        from_attributes = True

class JudgeProfile(BaseModel):
    id: int
    court_id: Optional[int]
    cnic: Optional[str]
    contact_no: Optional[str]
    rank: Optional[str]
    service_status: bool

    class Config:
        from_attributes = True

class UserResponse(BaseModel):
    id: int
    full_name: str
    email: str
    username: str
    role_name: str
    is_active: bool
    created_at: datetime
    last_password_changed_at: Optional[datetime] = None
    police_officer: Optional[PoliceOfficerProfile] = None
    judge: Optional[JudgeProfile] = None

    class Config:
        from_attributes = True

class UserCountsResponse(BaseModel):
    total: int
    active: int
    inactive: int
    by_role: Dict[str, int]

class MessageResponse(BaseModel):
    message: str
