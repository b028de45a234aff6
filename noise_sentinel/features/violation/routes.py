from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.violation.schema import ViolationCreate, ViolationUpdate, ViolationResponse
from noise_sentinel.features.violation.service import ViolationService
from noise_sentinel.models.enums import UserRole

router = APIRouter()

@router.post("/create", response_model=ViolationResponse, status_code=status.HTTP_201_CREATED)
def create_violation(
    data: ViolationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    """Add a violation type to the catalogue"""
    try:
        return ViolationService.create_violation(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[ViolationResponse])
def list_violations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ViolationService.get_all_violations(db)

@router.get("/cognizable", response_model=List[ViolationResponse])
def list_cognizable_violations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ViolationService.get_cognizable_violations(db)

@router.get("/search", response_model=List[ViolationResponse])
def search_violations(
    q: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ViolationService.search_violations(db, q)

@router.get("/{violation_id}", response_model=ViolationResponse)
def get_violation(
    violation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    violation = ViolationService.get_violation_by_id(db, violation_id)
    if not violation:
        raise HTTPException(status_code=404, detail=f"Violation with ID {violation_id} not found.")
    return violation

@router.put("/{violation_id}", response_model=ViolationResponse)
def update_violation(
    violation_id: int,
    data: ViolationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        violation = ViolationService.update_violation(db, violation_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not violation:
        raise HTTPException(status_code=404, detail=f"Violation with ID {violation_id} not found.")
    return violation

@router.delete("/{violation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_violation(
    violation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        success = ViolationService.delete_violation(db, violation_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail=f"Violation with ID {violation_id} not found.")
    return None
