from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.user.service import UserService
from noise_sentinel.features.iot_device.schema import (
    IotDeviceRegister,
    IotDeviceUpdate,
    IotDevicePair,
    IotDeviceResponse,
)
from noise_sentinel.features.iot_device.service import IotDeviceService
from noise_sentinel.models.enums import UserRole, STATION_ROLES

router = APIRouter()

@router.post("/register", response_model=IotDeviceResponse, status_code=status.HTTP_201_CREATED)
def register_device(
    data: IotDeviceRegister,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        return IotDeviceService.register_device(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[IotDeviceResponse])
def list_devices(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return IotDeviceService.get_all_devices(db, include_inactive)

@router.get("/available", response_model=List[IotDeviceResponse])
def list_available_devices(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER]))
):
    """Devices an officer can pair with"""
    return IotDeviceService.get_available_devices(db)

@router.get("/my-devices", response_model=List[IotDeviceResponse])
def my_devices(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER]))
):
    try:
        officer = UserService.require_officer_profile(current_user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return IotDeviceService.get_officer_devices(db, officer.id)

@router.post("/pair", response_model=IotDeviceResponse)
def pair_device(
    data: IotDevicePair,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER]))
):
    try:
        officer = UserService.require_officer_profile(current_user)
        return IotDeviceService.pair_device(db, data.device_id, officer)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/{device_id}/unpair", response_model=IotDeviceResponse)
def unpair_device(
    device_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER, UserRole.STATION_AUTHORITY]))
):
    """Officers release their own device; Station Authority may release any"""
    try:
        officer = None
        if current_user.role_name == UserRole.POLICE_OFFICER.value:
            officer = UserService.require_officer_profile(current_user)
        device = IotDeviceService.unpair_device(db, device_id, officer)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not device:
        raise HTTPException(status_code=404, detail=f"IoT Device with ID {device_id} not found.")
    return device

@router.get("/name/{device_name}", response_model=IotDeviceResponse)
def get_device_by_name(
    device_name: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    device = IotDeviceService.get_device_by_name(db, device_name)
    if not device:
        raise HTTPException(status_code=404, detail=f"IoT Device with name '{device_name}' not found.")
    return device

@router.get("/{device_id}", response_model=IotDeviceResponse)
def get_device(
    device_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    device = IotDeviceService.get_device_by_id(db, device_id)
    if not device:
        raise HTTPException(status_code=404, detail=f"IoT Device with ID {device_id} not found.")
    return device

@router.put("/{device_id}", response_model=IotDeviceResponse)
def update_device(
    device_id: int,
    data: IotDeviceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        device = IotDeviceService.update_device(db, device_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not device:
        raise HTTPException(status_code=404, detail=f"IoT Device with ID {device_id} not found.")
    return device

@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_device(
    device_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    if not IotDeviceService.deactivate_device(db, device_id):
        raise HTTPException(status_code=404, detail=f"IoT Device with ID {device_id} not found.")
    return None
