from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

DEVICE_NAME_PATTERN = r"^[A-Z0-9-]+$"
FIRMWARE_PATTERN = r"^v?\d+\.\d+(\.\d+)?$"

class IotDeviceRegister(BaseModel):
    device_name: str = Field(..., min_length=3, max_length=100, pattern=DEVICE_NAME_PATTERN)
    firmware_version: str = Field(..., max_length=50, pattern=FIRMWARE_PATTERN)
    calibration_date: datetime
    is_calibrated: bool
    calibration_certificate_no: Optional[str] = Field(None, max_length=100)

class IotDeviceUpdate(BaseModel):
    device_name: Optional[str] = Field(None, min_length=3, max_length=100, pattern=DEVICE_NAME_PATTERN)
    firmware_version: Optional[str] = Field(None, max_length=50, pattern=FIRMWARE_PATTERN)
    calibration_date: Optional[datetime] = None
    is_calibrated: Optional[bool] = None
    calibration_certificate_no: Optional[str] = Field(None, max_length=100)
    is_registered: Optional[bool] = None

class IotDevicePair(BaseModel):
    device_id: int

class IotDeviceResponse(BaseModel):
    id: int
    device_name: str
    firmware_version: Optional[str]
    calibration_date: Optional[datetime]
    is_calibrated: bool
    calibration_certificate_no: Optional[str]
    is_registered: bool
    is_active: bool
    paired_officer_id: Optional[int]
    pairing_datetime: Optional[datetime]
    total_reports: int = 0

    class Config:
        from_attributes = True
