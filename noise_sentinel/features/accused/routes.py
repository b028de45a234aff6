from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.core.validators import validate_cnic
from noise_sentinel.features.user.model import User
from noise_sentinel.features.accused.schema import AccusedCreate, AccusedUpdate, AccusedResponse
from noise_sentinel.features.accused.service import AccusedService
from noise_sentinel.models.enums import UserRole, STATION_ROLES

router = APIRouter()

@router.post("/create", response_model=AccusedResponse, status_code=status.HTTP_201_CREATED)
def create_accused(
    data: AccusedCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    try:
        return AccusedService.create_accused(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[AccusedResponse])
def list_accused(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    return AccusedService.get_all_accused(db)

@router.get("/search", response_model=List[AccusedResponse])
def search_accused(
    name: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return AccusedService.search_by_name(db, name)

@router.get("/province/{province}", response_model=List[AccusedResponse])
def accused_by_province(
    province: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return AccusedService.get_by_province(db, province)

@router.get("/city/{city}", response_model=List[AccusedResponse])
def accused_by_city(
    city: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return AccusedService.get_by_city(db, city)

@router.get("/cnic/{cnic}", response_model=AccusedResponse)
def accused_by_cnic(
    cnic: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        cnic = validate_cnic(cnic)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    accused = AccusedService.get_accused_by_cnic(db, cnic)
    if not accused:
        raise HTTPException(status_code=404, detail=f"Person with CNIC '{cnic}' not found.")
    return accused

@router.get("/{accused_id}", response_model=AccusedResponse)
def get_accused(
    accused_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    accused = AccusedService.get_accused_by_id(db, accused_id)
    if not accused:
        raise HTTPException(status_code=404, detail=f"Person with ID {accused_id} not found.")
    return accused

@router.put("/{accused_id}", response_model=AccusedResponse)
def update_accused(
    accused_id: int,
    data: AccusedUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        accused = AccusedService.update_accused(db, accused_id, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not accused:
        raise HTTPException(status_code=404, detail=f"Person with ID {accused_id} not found.")
    return accused

@router.delete("/{accused_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_accused(
    accused_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    try:
        success = AccusedService.delete_accused(db, accused_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not success:
        raise HTTPException(status_code=404, detail=f"Person with ID {accused_id} not found.")
    return None
