from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from datetime import datetime
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.user.service import UserService
from noise_sentinel.features.challan.schema import (
    ChallanCreate,
    ChallanGuidedCreate,
    ChallanCreatedResponse,
    ChallanResponse,
    ChallanListItem,
    ChallanDispute,
    PublicChallanSearch,
    OverdueSweepResponse,
)
from noise_sentinel.features.challan.service import ChallanService
from noise_sentinel.features.challan.workflow import ChallanWizard
from noise_sentinel.models.enums import UserRole, ChallanStatus

router = APIRouter()

@router.post("/create", response_model=ChallanCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_challan(
    data: ChallanCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER]))
):
    """Issue a challan"""
    try:
        officer = UserService.require_officer_profile(current_user)
        challan, message = ChallanService.create_challan(db, data, officer)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": message, "challan": challan}

@router.post("/guided-create", response_model=ChallanCreatedResponse, status_code=status.HTTP_201_CREATED)
def guided_create_challan(
    data: ChallanGuidedCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER]))
):
    """Issue a challan from plate and CNIC lookups, adding new records only on a miss"""
    try:
        officer = UserService.require_officer_profile(current_user)
        request = ChallanWizard.run(db, data)
        challan, message = ChallanService.create_challan(db, request, officer)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": message, "challan": challan}

@router.get("/my-challans", response_model=List[ChallanListItem])
def my_challans(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER]))
):
    try:
        officer = UserService.require_officer_profile(current_user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ChallanService.get_challans_by_officer(db, officer.id)

@router.get("/list", response_model=List[ChallanListItem])
def list_challans(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return ChallanService.get_all_challans(db)

@router.get("/station/{station_id}", response_model=List[ChallanListItem])
def challans_by_station(
    station_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return ChallanService.get_challans_by_station(db, station_id)

@router.get("/status/{challan_status}", response_model=List[ChallanListItem])
def challans_by_status(
    challan_status: ChallanStatus,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return ChallanService.get_challans_by_status(db, challan_status)

@router.get("/date-range", response_model=List[ChallanListItem])
def challans_by_date_range(
    start_date: datetime,
    end_date: datetime,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        return ChallanService.get_challans_by_date_range(db, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/overdue", response_model=List[ChallanListItem])
def overdue_challans(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return ChallanService.get_overdue_challans(db)

@router.post("/mark-overdue", response_model=OverdueSweepResponse)
def mark_overdue(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return {"updated": ChallanService.mark_overdue(db)}

@router.get("/vehicle/{vehicle_id}", response_model=List[ChallanListItem])
def challans_by_vehicle(
    vehicle_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ChallanService.get_challans_by_vehicle(db, vehicle_id)

@router.get("/accused/{accused_id}", response_model=List[ChallanListItem])
def challans_by_accused(
    accused_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ChallanService.get_challans_by_accused(db, accused_id)

@router.post("/public/search", response_model=List[ChallanListItem])
def public_search(data: PublicChallanSearch, db: Session = Depends(get_db)):
    """Citizen lookup by plate number and CNIC, no login required"""
    challans = ChallanService.search_by_plate_and_cnic(db, data.plate_number, data.cnic)
    if not challans:
        raise HTTPException(
            status_code=404,
            detail=f"No challans found for vehicle plate number '{data.plate_number}' and CNIC '{data.cnic}'.",
        )
    return challans

@router.post("/{challan_id}/pay", response_model=ChallanResponse)
def pay_challan(
    challan_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        challan = ChallanService.pay_challan(db, challan_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not challan:
        raise HTTPException(status_code=404, detail=f"Challan with ID {challan_id} not found.")
    return challan

@router.post("/{challan_id}/dispute", response_model=ChallanResponse)
def dispute_challan(
    challan_id: int,
    data: ChallanDispute,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        challan = ChallanService.dispute_challan(db, challan_id, data.reason)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not challan:
        raise HTTPException(status_code=404, detail=f"Challan with ID {challan_id} not found.")
    return challan

@router.get("/{challan_id}", response_model=ChallanResponse)
def get_challan(
    challan_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    challan = ChallanService.get_challan_by_id(db, challan_id)
    if not challan:
        raise HTTPException(status_code=404, detail=f"Challan with ID {challan_id} not found.")
    return challan
