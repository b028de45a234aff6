from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.vehicle.schema import VehicleCreate, VehicleUpdate, VehicleResponse
from noise_sentinel.features.vehicle.service import VehicleService
from noise_sentinel.models.enums import UserRole, STATION_ROLES

router = APIRouter()

@router.post("/create", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    data: VehicleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    try:
        return VehicleService.create_vehicle(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[VehicleResponse])
def list_vehicles(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return VehicleService.get_all_vehicles(db)

@router.get("/search", response_model=List[VehicleResponse])
def search_vehicles(
    make: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return VehicleService.search_by_make(db, make)

@router.get("/owner/{owner_id}", response_model=List[VehicleResponse])
def vehicles_by_owner(
    owner_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return VehicleService.get_vehicles_by_owner(db, owner_id)

@router.get("/plate/{plate_number}", response_model=VehicleResponse)
def vehicle_by_plate(
    plate_number: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    vehicle = VehicleService.get_vehicle_by_plate(db, plate_number)
    if not vehicle:
        raise HTTPException(status_code=404, detail=f"Vehicle with plate number '{plate_number}' not found.")
    return vehicle

@router.get("/{vehicle_id}", response_model=VehicleResponse)
def get_vehicle(
    vehicle_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    vehicle = VehicleService.get_vehicle_by_id(db, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail=f"Vehicle with ID {vehicle_id} not found.")
    return vehicle

@router.put("/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(
    vehicle_id: int,
    data: VehicleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        vehicle = VehicleService.update_vehicle(db, vehicle_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not vehicle:
        raise HTTPException(status_code=404, detail=f"Vehicle with ID {vehicle_id} not found.")
    return vehicle

@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(
    vehicle_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        success = VehicleService.delete_vehicle(db, vehicle_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail=f"Vehicle with ID {vehicle_id} not found.")
    return None
