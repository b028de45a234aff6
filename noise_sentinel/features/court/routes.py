from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.court.schema import (
    CourtCreate,
    CourtUpdate,
    CourtResponse,
    CourtTypeResponse,
)
from noise_sentinel.features.court.service import CourtService
from noise_sentinel.models.enums import UserRole

router = APIRouter()

@router.get("/types", response_model=List[CourtTypeResponse])
def list_court_types(db: Session = Depends(get_db)):
    return CourtService.get_court_types(db)

@router.post("/create", response_model=CourtResponse, status_code=status.HTTP_201_CREATED)
def create_court(
    data: CourtCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    try:
        return CourtService.create_court(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[CourtResponse])
def list_courts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return CourtService.get_all_courts(db)

@router.get("/type/{court_type_id}", response_model=List[CourtResponse])
def courts_by_type(
    court_type_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return CourtService.get_courts_by_type(db, court_type_id)

@router.get("/province/{province}", response_model=List[CourtResponse])
def courts_by_province(
    province: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return CourtService.get_courts_by_province(db, province)

@router.get("/{court_id}", response_model=CourtResponse)
def get_court(
    court_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    court = CourtService.get_court_by_id(db, court_id)
    if not court:
        raise HTTPException(status_code=404, detail=f"Court with ID {court_id} not found.")
    return court

@router.put("/{court_id}", response_model=CourtResponse)
def update_court(
    court_id: int,
    data: CourtUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    try:
        court = CourtService.update_court(db, court_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not court:
        raise HTTPException(status_code=404, detail=f"Court with ID {court_id} not found.")
    return court

@router.delete("/{court_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_court(
    court_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    try:
        success = CourtService.delete_court(db, court_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail=f"Court with ID {court_id} not found.")
    return None
