from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.police_station.schema import (
    PoliceStationCreate,
    PoliceStationUpdate,
    PoliceStationResponse,
)
from noise_sentinel.features.police_station.service import PoliceStationService
from noise_sentinel.models.enums import UserRole

router = APIRouter()

@router.post("/create", response_model=PoliceStationResponse, status_code=status.HTTP_201_CREATED)
def create_station(
    data: PoliceStationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        return PoliceStationService.create_station(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[PoliceStationResponse])
def list_stations(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return PoliceStationService.get_all_stations(db, include_inactive)

@router.get("/province/{province}", response_model=List[PoliceStationResponse])
def stations_by_province(
    province: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return PoliceStationService.get_stations_by_province(db, province)

@router.get("/code/{station_code}", response_model=PoliceStationResponse)
def station_by_code(
    station_code: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    station = PoliceStationService.get_station_by_code(db, station_code)
    if not station:
        raise HTTPException(status_code=404, detail=f"Police station with code '{station_code}' not found.")
    return station

@router.get("/{station_id}", response_model=PoliceStationResponse)
def get_station(
    station_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    station = PoliceStationService.get_station_by_id(db, station_id)
    if not station:
        raise HTTPException(status_code=404, detail=f"Police station with ID {station_id} not found.")
    return station

@router.put("/{station_id}", response_model=PoliceStationResponse)
def update_station(
    station_id: int,
    data: PoliceStationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        station = PoliceStationService.update_station(db, station_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not station:
        raise HTTPException(status_code=404, detail=f"Police station with ID {station_id} not found.")
    return station

@router.delete("/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_station(
    station_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    try:
        success = PoliceStationService.delete_station(db, station_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail=f"Police station with ID {station_id} not found.")
    return None
