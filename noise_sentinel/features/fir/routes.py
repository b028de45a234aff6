from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from datetime import datetime
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.fir.schema import FirCreate, FirUpdate, FirResponse
from noise_sentinel.features.fir.service import FirService
from noise_sentinel.features.challan.schema import ChallanListItem
from noise_sentinel.models.enums import UserRole, FirStatus, ALL_ROLES

router = APIRouter()

@router.post("/create", response_model=FirResponse, status_code=status.HTTP_201_CREATED)
def create_fir(
    data: FirCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    """File an FIR for a cognizable challan"""
    try:
        return FirService.create_fir(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[FirResponse])
def list_firs(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY, UserRole.COURT_AUTHORITY]))
):
    return FirService.get_all_firs(db)

@router.get("/cognizable-challans", response_model=List[ChallanListItem])
def cognizable_challans_without_fir(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return FirService.get_cognizable_challans_without_fir(db)

@router.get("/station/{station_id}", response_model=List[FirResponse])
def firs_by_station(
    station_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY, UserRole.COURT_AUTHORITY]))
):
    return FirService.get_firs_by_station(db, station_id)

@router.get("/informant/{informant_id}", response_model=List[FirResponse])
def firs_by_informant(
    informant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY, UserRole.COURT_AUTHORITY]))
):
    return FirService.get_firs_by_informant(db, informant_id)

@router.get("/status/{fir_status}", response_model=List[FirResponse])
def firs_by_status(
    fir_status: FirStatus,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY, UserRole.COURT_AUTHORITY]))
):
    return FirService.get_firs_by_status(db, fir_status)

@router.get("/date-range", response_model=List[FirResponse])
def firs_by_date_range(
    start_date: datetime,
    end_date: datetime,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY, UserRole.COURT_AUTHORITY]))
):
    try:
        return FirService.get_firs_by_date_range(db, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/search", response_model=List[FirResponse])
def search_firs(
    q: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return FirService.search_firs(db, q)

@router.get("/number/{fir_no}", response_model=FirResponse)
def get_fir_by_number(
    fir_no: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ALL_ROLES))
):
    fir = FirService.get_fir_by_number(db, fir_no)
    if not fir:
        raise HTTPException(status_code=404, detail=f"FIR with number '{fir_no}' not found.")
    return fir

@router.post("/{fir_id}/escalate", response_model=FirResponse)
def escalate_fir(
    fir_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        fir = FirService.escalate_fir(db, fir_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not fir:
        raise HTTPException(status_code=404, detail=f"FIR with ID {fir_id} not found.")
    return fir

@router.get("/{fir_id}", response_model=FirResponse)
def get_fir(
    fir_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ALL_ROLES))
):
    fir = FirService.get_fir_by_id(db, fir_id)
    if not fir:
        raise HTTPException(status_code=404, detail=f"FIR with ID {fir_id} not found.")
    return fir

@router.put("/{fir_id}", response_model=FirResponse)
def update_fir(
    fir_id: int,
    data: FirUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        fir = FirService.update_fir(db, fir_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not fir:
        raise HTTPException(status_code=404, detail=f"FIR with ID {fir_id} not found.")
    return fir
